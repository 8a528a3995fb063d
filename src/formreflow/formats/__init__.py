# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

"""Template and bound-input codecs."""

from .bound_input import (
    MALFORMED_CONTENT_POLICIES,
    BoundInput,
    MalformedContentPolicy,
    bound_input_from_dict,
    encode_table_content,
    load_bound_input,
    parse_table_content,
)
from .template_codec import (
    dump_template,
    load_template,
    schema_from_dict,
    schema_to_dict,
    template_from_dict,
    template_to_dict,
    template_to_json,
)

__all__ = [
    "BoundInput",
    "MALFORMED_CONTENT_POLICIES",
    "MalformedContentPolicy",
    "bound_input_from_dict",
    "dump_template",
    "encode_table_content",
    "load_bound_input",
    "load_template",
    "parse_table_content",
    "schema_from_dict",
    "schema_to_dict",
    "template_from_dict",
    "template_to_dict",
    "template_to_json",
]
