from Analyzer.pipeline import build_context, build_prompt
from Analyzer.pipeline.prompt import ANSWER_CUE, PROMPT_PREAMBLE

SELECTION = "The mitochondria is the powerhouse of the cell."


def test_context_with_selection_only():
    context = build_context(SELECTION)

    assert context == f'Selected Text: "{SELECTION}"'


def test_context_includes_url_and_page_content_in_order():
    context = build_context(SELECTION, "https://example.com/bio", "Cells are small.")

    assert context == (
        f'Selected Text: "{SELECTION}"\n\n'
        "Page URL: https://example.com/bio\n\n"
        "Page Context: Cells are small."
    )


def test_context_page_content_without_url():
    context = build_context(SELECTION, page_content="Cells are small.")

    assert "Page URL" not in context
    assert context.index("Selected Text") < context.index("Page Context")


def test_context_skips_empty_optional_fields():
    assert build_context(SELECTION, "", "") == build_context(SELECTION)
    assert build_context(SELECTION, None, None) == build_context(SELECTION)


def test_context_truncates_page_content_to_5000_characters():
    page = "a" * 4999 + "bc" + "z" * 1000

    context = build_context(SELECTION, page_content=page)

    included = context.split("Page Context: ", 1)[1]
    assert len(included) == 5000
    assert included.endswith("ab")


def test_context_truncation_honours_custom_limit():
    context = build_context(SELECTION, page_content="abcdefgh", limit=3)

    assert context.endswith("Page Context: abc")


def test_prompt_layout():
    context = build_context(SELECTION)

    prompt = build_prompt("Why is this important?", context)

    assert prompt.startswith(PROMPT_PREAMBLE)
    assert context in prompt
    assert "User Question: Why is this important?" in prompt
    assert prompt.endswith(ANSWER_CUE)
    assert prompt.index(context) < prompt.index("User Question:")


def test_prompt_is_deterministic():
    context = build_context(SELECTION, "https://example.com", "Body text")

    first = build_prompt("What does this mean?", context)
    second = build_prompt("What does this mean?", context)

    assert first == second
