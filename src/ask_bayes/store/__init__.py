"""Persistent storage of hypothesis priors."""

from ask_bayes.store.prior_store import (
    SQLitePriorStore,
    decode_prior,
    encode_prior,
    get_prior,
    remove_prior,
    set_prior,
)

__all__ = [
    "SQLitePriorStore",
    "decode_prior",
    "encode_prior",
    "get_prior",
    "remove_prior",
    "set_prior",
]
