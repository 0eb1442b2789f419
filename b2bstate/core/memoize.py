"""
Memoization primitives for selectors.

Consumers rely on reference stability: when nothing relevant changed, a
memoized selector returns the *same* object it returned last time, so an
``is`` check is enough to skip redundant work.

- create_selector: cache keyed on the identity of the single input
- create_derived_selector: recompute only when a dependency result changes
- create_shallow_equal_selector: keep the previous result object when the
  new one is shallowly equal
- create_parameterized_selector: bounded per-parameter cache
- create_derived_shallow_selector: derived + shallow-equal stabilisation

None of these raise; the worst case is a full recomputation.
"""

from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from cachetools import FIFOCache

DEFAULT_CACHE_SIZE = 10

_MISSING = object()

_SCALARS = (str, int, float, bool, type(None))


def same(a: Any, b: Any) -> bool:
    """
    Value-identity comparison.

    Scalars compare by value (two equal ints computed separately are "the
    same"), everything else by object identity.
    """
    if a is b:
        return True
    if isinstance(a, _SCALARS) and type(a) is type(b):
        return a == b
    return False


def shallow_equal(a: Any, b: Any) -> bool:
    """True when both mappings have the same keys and same() values."""
    if a is b:
        return True
    if not isinstance(a, Mapping) or not isinstance(b, Mapping):
        return False
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b or not same(value, b[key]):
            return False
    return True


def _deps_unchanged(deps: Sequence[Any], last: Optional[Sequence[Any]]) -> bool:
    if last is None or len(deps) != len(last):
        return False
    return all(same(d, l) for d, l in zip(deps, last))


def create_selector(selector: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Cache a single-input selector by input identity.

    Usage:
        select_items = create_selector(lambda state: [i for i in state.items if i.active])
    """
    last_state: Any = _MISSING
    last_result: Any = _MISSING

    def memoized(state):
        nonlocal last_state, last_result
        if last_result is not _MISSING and last_state is state:
            return last_result
        result = selector(state)
        last_state = state
        last_result = result
        return result

    def cache_clear() -> None:
        nonlocal last_state, last_result
        last_state = _MISSING
        last_result = _MISSING

    memoized.cache_clear = cache_clear  # type: ignore[attr-defined]
    memoized.__wrapped__ = selector  # type: ignore[attr-defined]
    return memoized


def create_derived_selector(
    dependencies: Sequence[Callable[[Any], Any]],
    combiner: Callable[..., Any],
) -> Callable[[Any], Any]:
    """
    Derive a value from several input selectors.

    All dependencies are evaluated on every call; the combiner runs only if
    at least one of them returned something different from last time.
    """
    deps_fns = tuple(dependencies)
    last_deps: Optional[Tuple[Any, ...]] = None
    last_result: Any = None

    def memoized(state):
        nonlocal last_deps, last_result
        deps = tuple(fn(state) for fn in deps_fns)
        if _deps_unchanged(deps, last_deps):
            return last_result
        result = combiner(*deps)
        last_deps = deps
        last_result = result
        return result

    def cache_clear() -> None:
        nonlocal last_deps, last_result
        last_deps = None
        last_result = None

    memoized.cache_clear = cache_clear  # type: ignore[attr-defined]
    return memoized


def create_shallow_equal_selector(
    selector: Callable[[Any], Mapping[str, Any]],
) -> Callable[[Any], Mapping[str, Any]]:
    """
    Like create_selector, but a new result that is shallowly equal to the
    previous one is dropped and the previous object is returned instead.
    """
    last_state: Any = _MISSING
    last_result: Any = _MISSING

    def memoized(state):
        nonlocal last_state, last_result
        if last_result is not _MISSING and last_state is state:
            return last_result
        result = selector(state)
        if last_result is not _MISSING and shallow_equal(result, last_result):
            last_state = state
            return last_result
        last_state = state
        last_result = result
        return result

    def cache_clear() -> None:
        nonlocal last_state, last_result
        last_state = _MISSING
        last_result = _MISSING

    memoized.cache_clear = cache_clear  # type: ignore[attr-defined]
    memoized.__wrapped__ = selector  # type: ignore[attr-defined]
    return memoized


def create_parameterized_selector(
    selector: Callable[[Any, Any], Any],
    cache_size: int = DEFAULT_CACHE_SIZE,
) -> Callable[[Any, Any], Any]:
    """
    Cache a (state, param) selector per parameter.

    Holds at most cache_size parameters; the oldest inserted one is evicted
    first. A hit needs the same param and the same state object that was
    cached for it. Params are keyed with their type, so True and 1 stay
    apart; unhashable params are computed without caching.
    """
    cache: FIFOCache = FIFOCache(maxsize=max(1, cache_size))

    def memoized(state, param):
        key = (type(param), param)
        try:
            cached = cache.get(key)
        except TypeError:
            return selector(state, param)
        if cached is not None and cached[0] is state:
            return cached[1]
        result = selector(state, param)
        cache[key] = (state, result)
        return result

    memoized.cache = cache  # type: ignore[attr-defined]
    memoized.cache_clear = cache.clear  # type: ignore[attr-defined]
    memoized.__wrapped__ = selector  # type: ignore[attr-defined]
    return memoized


def create_derived_shallow_selector(
    dependencies: Sequence[Callable[[Any], Any]],
    combiner: Callable[..., Mapping[str, Any]],
) -> Callable[[Any], Mapping[str, Any]]:
    """Derived selector whose result is also stabilised by shallow equality."""
    deps_fns = tuple(dependencies)
    last_deps: Optional[Tuple[Any, ...]] = None
    last_result: Any = _MISSING

    def memoized(state):
        nonlocal last_deps, last_result
        deps = tuple(fn(state) for fn in deps_fns)
        if last_result is not _MISSING and _deps_unchanged(deps, last_deps):
            return last_result
        result = combiner(*deps)
        last_deps = deps
        if last_result is not _MISSING and shallow_equal(result, last_result):
            return last_result
        last_result = result
        return result

    def cache_clear() -> None:
        nonlocal last_deps, last_result
        last_deps = None
        last_result = _MISSING

    memoized.cache_clear = cache_clear  # type: ignore[attr-defined]
    return memoized
