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

from typing import Any, Optional, TypeVar, get_type_hints

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, SequenceAccess
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.tuple_term_type import decode_fixed_elements
from eetf_codec.utils.typing import is_namedtuple

N = TypeVar('N', bound=tuple)


class NamedTupleTermType(TermType[N]):
    """ Represents `typing.NamedTuple` classes as tuple records, written as a tuple term without field names.

    The field types are resolved on first use, so a named tuple can refer to itself.
    """

    __slots__ = ('_args', '_actual_type', '_type_map')

    _is_hashable = True
    _args: Optional[tuple[TermType, ...]]
    _actual_type: type[N]
    _type_map: TermType.TypeMap

    def __init__(self, namedtuple: type[N], type_map: TermType.TypeMap) -> None:
        self._actual_type = namedtuple
        self._type_map = type_map
        self._args = None

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: TermType.TypeMap) -> Self:
        if not is_namedtuple(type_):
            raise TypeError('expected NamedTuple type')
        return cls(type_, type_map)

    def _get_args(self) -> tuple[TermType, ...]:
        if self._args is None:
            hints = get_type_hints(self._actual_type)
            fields = self._actual_type._fields  # type: ignore[attr-defined]
            # XXX: fields without annotation (collections.namedtuple) are Any, they can be encoded but not decoded
            self._args = tuple(TermType.from_type(hints.get(field, Any), type_map=self._type_map) for field in fields)
        return self._args

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, self._actual_type):
            raise TypeError(f'expected {self._actual_type.__name__} instance')
        if deep:
            for i, arg_term_type in zip(value, self._get_args()):
                arg_term_type._check_value(i, deep=True)

    @override
    def _encode(self, encoder: Encoder, value: N, /) -> Term:
        args = self._get_args()
        builder = encoder.encode_tuple_struct(self._actual_type.__name__, len(args))
        for i, arg_term_type in zip(value, args):
            builder.add_element(arg_term_type, i)
        return builder.end()

    def _visit(self, access: SequenceAccess) -> N:
        return self._actual_type(*decode_fixed_elements(access, self._get_args()))

    @override
    def _decode(self, decoder: Decoder, /) -> N:
        return decoder.decode_tuple_struct(self._actual_type.__name__, len(self._get_args()), self._visit)
