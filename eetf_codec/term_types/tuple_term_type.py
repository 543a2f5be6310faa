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

from collections.abc import Iterable
from typing import get_args, get_origin

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, SequenceAccess
from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import WrongTupleLength
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType


# XXX: we can't usefully describe the tuple type
class TupleTermType(TermType[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    A fixed size `tuple[A, B]` is written as a tuple term, while a `tuple[T, ...]` is a sequence and is written as a
    list term.
    """

    __slots__ = ('_is_hashable', '_varsize', '_args')

    _varsize: bool
    _args: tuple[TermType, ...]

    def __init__(self, args: TermType | Iterable[TermType]) -> None:
        if isinstance(args, Iterable):
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, TermType)
            self._is_hashable = all(arg_term_type.is_hashable() for arg_term_type in self._args)
        else:
            assert isinstance(args, TermType)
            self._varsize = True
            self._args = (args,)
            self._is_hashable = args.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: TermType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, tuple):
            raise TypeError('expected tuple type')
        args = list(get_args(type_))
        if not args:
            raise TypeError('expected tuple[<args...>]')
        if args[-1] == Ellipsis:
            if len(args) != 2:
                raise TypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(TermType.from_type(arg, type_map=type_map))
        else:
            return cls(TermType.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise TypeError('expected tuple-like')
        if not self._varsize and len(value) != len(self._args):
            raise TypeError('wrong tuple size')
        if deep:
            if self._varsize:
                arg_term_type, = self._args
                for i in value:
                    arg_term_type._check_value(i, deep=True)
            else:
                for i, arg_term_type in zip(value, self._args):
                    arg_term_type._check_value(i, deep=True)

    @override
    def _encode(self, encoder: Encoder, value: tuple, /) -> Term:
        if self._varsize:
            arg_term_type, = self._args
            seq_builder = encoder.encode_seq(len(value))
            for i in value:
                seq_builder.add_element(arg_term_type, i)
            return seq_builder.end()
        builder = encoder.encode_tuple(len(self._args))
        for i, arg_term_type in zip(value, self._args):
            builder.add_element(arg_term_type, i)
        return builder.end()

    def _visit_fixed(self, access: SequenceAccess) -> tuple:
        return decode_fixed_elements(access, self._args)

    def _visit_varsize(self, access: SequenceAccess) -> tuple:
        arg_term_type, = self._args
        return tuple(arg_term_type.decode(i) for i in access)

    @override
    def _decode(self, decoder: Decoder, /) -> tuple:
        if self._varsize:
            return decoder.decode_seq(self._visit_varsize)
        return decoder.decode_tuple(len(self._args), self._visit_fixed)


def decode_fixed_elements(access: SequenceAccess, term_types: tuple[TermType, ...]) -> tuple:
    """ Pull exactly one element per term type from a sequence cursor.
    """
    values = []
    for term_type in term_types:
        element = access.next_element()
        if element is None:
            raise WrongTupleLength
        values.append(term_type.decode(element))
    return tuple(values)
