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

from __future__ import annotations

from typing import Any

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term.term import TERM_CLASSES
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.utils import is_term_annotation


class TermTermType(TermType[Term]):
    """ Raw passthrough, values annotated with `Term` (or a single term class) are term nodes and are kept as they are.

    >>> from eetf_codec.term import Atom
    >>> from eetf_codec.term_types import make_term_type
    >>> make_term_type(Term).to_term(Atom('ok'))
    Atom(name='ok')
    """

    __slots__ = ('_classes',)

    _is_hashable = True
    _classes: tuple[type, ...]

    def __init__(self, classes: tuple[type, ...]) -> None:
        self._classes = classes

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TermType.TypeMap) -> Self:
        if not is_term_annotation(type_):
            raise TypeError('expected Term type')
        if type_ in TERM_CLASSES:
            return cls((type_,))
        return cls(TERM_CLASSES)

    @override
    def _check_value(self, value: Term, /, *, deep: bool) -> None:
        if not isinstance(value, self._classes):
            raise TypeError(f'expected one of: {", ".join(c.__name__ for c in self._classes)}')

    @override
    def _encode(self, encoder: Encoder, value: Term, /) -> Term:
        return encoder.encode_term(value)

    @override
    def _decode(self, decoder: Decoder, /) -> Term:
        return decoder.decode_term()
