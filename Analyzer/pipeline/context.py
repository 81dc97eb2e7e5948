"""
Context assembly for analysis prompts
"""
from typing import Optional

# Characters of page content kept before it is added to the context
PAGE_CONTENT_LIMIT = 5000


def build_context(
    selected_text: str,
    page_url: Optional[str] = None,
    page_content: Optional[str] = None,
    limit: int = PAGE_CONTENT_LIMIT
) -> str:
    """
    Merge the selection and optional page details into one context block.

    Sections always appear in the same order (selection, URL, page
    content) separated by blank lines; empty optional inputs are left out.
    Page content is cut to its first `limit` characters, not summarized.

    Args:
        selected_text: Text the user highlighted, quoted verbatim
        page_url: Source page address
        page_content: Plain-text page body
        limit: Maximum characters of page content to include

    Returns:
        Context block string
    """
    sections = [f'Selected Text: "{selected_text}"']

    if page_url:
        sections.append(f"Page URL: {page_url}")

    if page_content:
        sections.append(f"Page Context: {page_content[:limit]}")

    return "\n\n".join(sections)
