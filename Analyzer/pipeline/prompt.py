"""
Prompt template for the analysis model
"""

PROMPT_PREAMBLE = (
    "You are an AI assistant that helps users understand and analyze text "
    "they've selected from web pages."
)

ANSWER_GUIDELINES = (
    "Please provide a helpful, accurate, and concise answer based on the "
    "selected text and context provided. If the selected text doesn't contain "
    "enough information to answer the question, say so clearly. Keep your "
    "response focused and relevant to what the user is asking."
)

ANSWER_CUE = "Answer:"


def build_prompt(question: str, context: str) -> str:
    """Wrap context and question in the instruction template."""
    return f"""{PROMPT_PREAMBLE}

{context}

User Question: {question}

{ANSWER_GUIDELINES}

{ANSWER_CUE}"""
