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

"""
Conversion of identifiers between snake_case (how atoms are usually spelled on the BEAM side) and CamelCase (how enum
variants are usually named in Python).

Words are split on underscores, dashes and spaces, on lower to upper case transitions, and before the last capital of
an acronym run:

>>> to_snake_case('AnOption')
'an_option'
>>> to_snake_case('HTTPServer')
'http_server'
>>> to_snake_case('AN_OPTION')
'an_option'
>>> to_camel_case('an_option')
'AnOption'
>>> to_camel_case('ok')
'Ok'
>>> to_camel_case(to_snake_case('Utf8Text'))
'Utf8Text'

Only enum variant names go through these functions, record field names are used verbatim.
"""

import re

_WORD_RE = re.compile(r'[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+')


def split_words(name: str) -> list[str]:
    return _WORD_RE.findall(name)


def to_snake_case(name: str) -> str:
    return '_'.join(word.lower() for word in split_words(name))


def to_camel_case(name: str) -> str:
    return ''.join(word[0].upper() + word[1:].lower() for word in split_words(name))
