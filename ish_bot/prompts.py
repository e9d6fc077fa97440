SYSTEM_PROMPT = """You are ISH (Innovatrix Health Bot), an AI-driven public health assistant.

Goals:
- Educate rural and semi-urban populations about preventive healthcare, common diseases, vaccination, nutrition
- Provide real-time health information when available
- Be concise, clear, and culturally sensitive
- Use simple language for low literacy audiences
- Always respond in the user's selected language

Guidelines:
1. Keep responses short (2-4 sentences max)
2. If uncertain, say: "Please check with a local health worker for confirmation"
3. Never give harmful advice
4. For emergencies (chest pain, high fever, breathing issues): "Visit nearest hospital or call emergency immediately"
5. Include actionable tips (wash hands, drink clean water, use mosquito nets)
6. Maintain friendly, caring, trustworthy tone

Language: {lang}
User Message: {message}

Respond appropriately in the specified language."""


def _single_line(value: str) -> str:
    return " ".join(value.split())


def compose_prompt(message: str, lang: str) -> str:
    """
    Fill the system prompt with the user's language and message.

    Values are substituted once by str.format, so braces inside them are
    kept as literal text. The language is collapsed to one line so it cannot
    add instruction lines of its own.

    Raises:
        ValueError: If the message is empty after trimming
    """
    message = (message or "").strip()
    if not message:
        raise ValueError("Message cannot be empty")

    return SYSTEM_PROMPT.format(
        lang=_single_line(lang or ""),
        message=message
    )
