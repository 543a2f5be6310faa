# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Optional

from pydantic import Field

from eetf_codec.utils.pydantic import BaseModel


class CodecSettings(BaseModel):
    """Knobs shared by the encode and decode entry points, the defaults match the behavior of the plain functions.

    >>> CodecSettings().convert_variant_case
    True
    >>> CodecSettings(compression_level=6).compression_level
    6
    """

    # Variant names are snake_cased when written as atoms and CamelCased when read back.
    convert_variant_case: bool = True

    # Maximum number of bytes a decode call will read, including the inflated size of a compressed term.
    max_input_bytes: Optional[int] = Field(default=None, gt=0)

    # When set, terms are written inside the zlib envelope using this compression level.
    compression_level: Optional[int] = Field(default=None, ge=0, le=9)


DEFAULT_SETTINGS = CodecSettings()
