import secrets
from random import Random
from typing import Any, Optional, TypeVar
from unittest import TestCase as _TestCase, main as ut_main

from structlog import get_logger

from eetf_codec.settings import CodecSettings
from eetf_codec.term import Term, term_from_bytes, term_to_bytes
from eetf_codec.term_types import TermType, make_term_type

logger = get_logger()
main = ut_main

T = TypeVar('T')


class TestCase(_TestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = Random(self.seed)

    def _term_type(self, type_: Any) -> TermType:
        return make_term_type(type_)

    def _run_test(self, type_: Any, value: Any, *, settings: Optional[CodecSettings] = None) -> Term:
        """ Encode the value, go through the byte layout and back, and check that the same value is decoded.

        The encoded term is returned so callers can make assertions about it.
        """
        term_type = self._term_type(type_)
        term = term_type.to_term(value, settings=settings)
        self.assertEqual(term_from_bytes(term_to_bytes(term)), term)
        self.assertEqual(term_type.from_term(term, settings=settings), value)
        return term

    def _decode(self, type_: type[T], term: Term, *, settings: Optional[CodecSettings] = None) -> T:
        return self._term_type(type_).from_term(term, settings=settings)
