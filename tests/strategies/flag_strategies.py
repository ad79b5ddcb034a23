"""
Common Hypothesis strategies for property-based testing of flag scopes.
"""

from hypothesis import strategies as st

flag_names = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz_",
    min_size=1,
    max_size=12,
).filter(lambda name: not name.startswith("_"))

# Values a computation may return; includes the falsy-in-Python values
# that must still enable a flag.
computation_results = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(-5, 5),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=5),
    st.lists(st.integers(), max_size=3),
    st.dictionaries(st.text(max_size=3), st.integers(), max_size=2),
)


@st.composite
def flag_declarations(draw, min_size: int = 1, max_size: int = 8):
    """
    Generate an ordered list of ``(name, default)`` declarations with unique names.

    Returns:
        A list of (name, bool) tuples
    """
    names = draw(st.lists(flag_names, min_size=min_size, max_size=max_size, unique=True))
    return [(name, draw(st.booleans())) for name in names]


@st.composite
def persisted_records(draw, names):
    """Generate a persisted name -> bool map over a subset of ``names``."""
    subset = draw(st.lists(st.sampled_from(names), unique=True)) if names else []
    return {name: draw(st.booleans()) for name in subset}
