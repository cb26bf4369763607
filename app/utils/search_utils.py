def parse_tags(search: str) -> list:
    """Tag names written as ``[tag]`` in a search string, lowercased."""
    return [
        word[1:-1].lower()
        for word in search.split()
        if len(word) > 2 and word.startswith("[") and word.endswith("]")
    ]


def parse_keywords(search: str) -> list:
    return [word for word in search.split() if not (word.startswith("[") and word.endswith("]"))]


def check_keyword_in_question(question: dict, keywords: list) -> bool:
    title, text = question.get("title", ""), question.get("text", "")
    return any(word in title or word in text for word in keywords)


def check_tag_in_question(question: dict, tags: list) -> bool:
    return any(tag in question.get("tags", []) for tag in tags)


def filter_questions_by_search(qlist: list, search: str) -> list:
    """Keep questions matching any ``[tag]`` or any plain keyword in ``search``."""
    tags = parse_tags(search)
    keywords = parse_keywords(search)
    if not tags and not keywords:
        return qlist
    return [
        q for q in qlist
        if (keywords and check_keyword_in_question(q, keywords))
        or (tags and check_tag_in_question(q, tags))
    ]
