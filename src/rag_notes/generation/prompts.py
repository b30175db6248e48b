SYSTEM_INSTRUCTION = (
    "When answering the question or responding, use the context provided, "
    "if it is provided and relevant."
)

CONTEXT_HEADER = "Context:"
