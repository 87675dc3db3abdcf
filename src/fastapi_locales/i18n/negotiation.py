"""Accept-Language content negotiation."""


def parse_accept_language(header: str | None) -> list[str]:
    """Parse an Accept-Language header into an ordered preference list.

    Handles formats like:
    - "en-US,en;q=0.9,es;q=0.8"
    - "fr"
    - "zh-CN,*;q=0.1"

    Tags are returned as written, highest quality first. Ties keep
    header order, entries with q=0 are dropped, and the wildcard "*" is
    kept so callers can decide what to do with it.

    Args:
        header: The Accept-Language header value

    Returns:
        Language tags in preference order (empty if the header is missing).
    """
    if not header:
        return []

    languages: list[tuple[str, float, int]] = []

    for index, raw_part in enumerate(header.split(",")):
        part = raw_part.strip()
        if not part:
            continue

        lang, _, params = part.partition(";")
        lang = lang.strip()
        if not lang:
            continue

        q_value = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    q_value = float(value.strip())
                except ValueError:
                    q_value = 1.0

        if not q_value > 0:
            continue
        languages.append((lang, q_value, index))

    languages.sort(key=lambda x: (-x[1], x[2]))
    return [lang for lang, _, _ in languages]
