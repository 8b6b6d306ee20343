# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Internal contract checks for the chunk readers.

``@require`` guards arguments, ``@ensure`` guards return values and
``@invariant`` guards reader state around public methods. A failed check
raises :class:`AssertionError`; it marks a bug in the library or in a chunk
source, never a condition callers are expected to handle.

Checks only run when ``CHUNKREAD_DBC`` is truthy or inside
:func:`dbc_enabled`. The test suite turns them on for every test.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from functools import wraps

type Predicate = Callable[..., bool]

_ENV_FLAG = "CHUNKREAD_DBC"
_FALSY = frozenset({"", "0", "false", "off", "no"})
_override: bool | None = None


def dbc_active() -> bool:
    """Return ``True`` when contract checks should run."""

    if _override is not None:
        return _override
    return os.environ.get(_ENV_FLAG, "").strip().lower() not in _FALSY


@contextmanager
def dbc_enabled(*, active: bool = True) -> Iterator[None]:
    """Switch contract checks on (or off) for the duration of a block."""

    global _override
    saved = _override
    _override = active
    try:
        yield
    finally:
        _override = saved


def _verify(
    kind: str,
    target: Callable[..., object],
    predicates: tuple[Predicate, ...],
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
) -> None:
    for predicate in predicates:
        label = f"{kind} {getattr(predicate, '__name__', predicate)!s}"
        where = getattr(target, "__qualname__", repr(target))
        try:
            held = predicate(*args, **kwargs)
        except Exception as exc:
            msg = f"{label} on {where} raised {type(exc).__name__}: {exc}"
            raise AssertionError(msg) from exc
        if not held:
            msg = f"{label} on {where} does not hold for {args!r} {dict(kwargs)!r}"
            raise AssertionError(msg)


def require[**P, R](
    *predicates: Predicate,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Check ``predicates`` against the arguments before each call."""

    if not predicates:
        raise ValueError("require() needs at least one predicate")

    def decorate(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def checked(*args: P.args, **kwargs: P.kwargs) -> R:
            if dbc_active():
                _verify("require", func, predicates, args, kwargs)
            return func(*args, **kwargs)

        return checked

    return decorate


def ensure[**P, R](
    *predicates: Predicate,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Check ``predicates`` after each call.

    Predicates get the call's arguments plus the return value as the
    keyword argument ``result``.
    """

    if not predicates:
        raise ValueError("ensure() needs at least one predicate")

    def decorate(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def checked(*args: P.args, **kwargs: P.kwargs) -> R:
            result = func(*args, **kwargs)
            if dbc_active():
                _verify("ensure", func, predicates, args, {**kwargs, "result": result})
            return result

        return checked

    return decorate


def invariant[T: type](*predicates: Predicate) -> Callable[[T], T]:
    """Check ``predicates`` on the instance after ``__init__`` and around
    every public method defined directly on the decorated class.

    Predicates receive the instance only. They must read state directly:
    calling a wrapped method from a predicate would recurse.
    """

    if not predicates:
        raise ValueError("invariant() needs at least one predicate")

    def guard(method: Callable[..., object]) -> Callable[..., object]:
        @wraps(method)
        def checked(self: object, *args: object, **kwargs: object) -> object:
            if not dbc_active():
                return method(self, *args, **kwargs)
            _verify("invariant", method, predicates, (self,), {})
            try:
                return method(self, *args, **kwargs)
            finally:
                _verify("invariant", method, predicates, (self,), {})

        return checked

    def decorate(cls: T) -> T:
        init = cls.__init__

        @wraps(init)
        def checked_init(self: object, *args: object, **kwargs: object) -> None:
            init(self, *args, **kwargs)
            if dbc_active():
                _verify("invariant", init, predicates, (self,), {})

        cls.__init__ = checked_init  # type: ignore[misc]
        for name, member in list(vars(cls).items()):
            if name.startswith("_") or not callable(member):
                continue
            if isinstance(member, (staticmethod, classmethod)):
                continue
            setattr(cls, name, guard(member))
        return cls

    return decorate


__all__ = [
    "dbc_active",
    "dbc_enabled",
    "ensure",
    "invariant",
    "require",
]
