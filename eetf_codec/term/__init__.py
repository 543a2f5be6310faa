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

from eetf_codec.term.reader import read_term, term_from_bytes
from eetf_codec.term.term import (
    FALSE,
    NIL,
    TRUE,
    Atom,
    BigInteger,
    Binary,
    BitBinary,
    ExternalFun,
    FixInteger,
    Float,
    Fun,
    ImproperList,
    InternalFun,
    List,
    Map,
    Pid,
    Port,
    Reference,
    Term,
    Tuple,
    is_term,
    kind_name,
)
from eetf_codec.term.writer import term_to_bytes, write_term

__all__ = [
    'Atom',
    'BigInteger',
    'Binary',
    'BitBinary',
    'ExternalFun',
    'FALSE',
    'FixInteger',
    'Float',
    'Fun',
    'ImproperList',
    'InternalFun',
    'List',
    'Map',
    'NIL',
    'Pid',
    'Port',
    'Reference',
    'TRUE',
    'Term',
    'Tuple',
    'is_term',
    'kind_name',
    'read_term',
    'term_from_bytes',
    'term_to_bytes',
    'write_term',
]
