"""Shared hypothesis strategies for stache property-based testing.

Provides strategies for template sources at two levels:

- **Text**: plain text that contains no tags
- **Templates**: well-formed fragments of text, variables and sections

Individual test modules compose them into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

# Plain text with no braces, so it can never open a tag
plain_text = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs",),  # no surrogates
        blacklist_characters="{}\x00",
    ),
    min_size=1,
    max_size=200,
)

# Arbitrary input that might stress the parser
arbitrary_template_source = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=300,
)

# ---------------------------------------------------------------------------
# Names and values
# ---------------------------------------------------------------------------

safe_identifier = st.sampled_from(
    ["a", "b", "x", "y", "name", "item", "count", "title", "flag", "data"]
)

scalar_value = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=20),
)

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_inline_text = st.from_regex(r"[a-zA-Z0-9 .,:;!?-]{0,12}", fullmatch=True)

variable_tag = safe_identifier.map(lambda name: f"{{{{{name}}}}}")
comment_tag = st.from_regex(r"[a-zA-Z0-9 ]{0,20}", fullmatch=True).map(
    lambda body: f"{{{{!{body}}}}}"
)


def _section(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    return st.tuples(st.sampled_from("#^"), safe_identifier, children).map(
        lambda parts: f"{{{{{parts[0]}{parts[1]}}}}}{parts[2]}{{{{/{parts[1]}}}}}"
    )


# Well-formed templates: text, variables, comments and nested sections
template_source = st.recursive(
    st.lists(st.one_of(_inline_text, variable_tag, comment_tag), max_size=5).map("".join),
    lambda children: st.lists(
        st.one_of(_inline_text, variable_tag, _section(children)), max_size=4
    ).map("".join),
    max_leaves=12,
)

# Context dicts over the same names the templates use
template_context = st.dictionaries(safe_identifier, scalar_value, max_size=6)
