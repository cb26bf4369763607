from datetime import datetime, timedelta

TRENDING_WINDOW = timedelta(days=2)


def _asked(question: dict) -> datetime:
    return question.get("askDateTime") or datetime.min


def sort_questions_by_newest(qlist: list) -> list:
    return sorted(qlist, key=_asked, reverse=True)


def sort_questions_by_unanswered(qlist: list) -> list:
    return [q for q in sort_questions_by_newest(qlist) if not q.get("answers")]


def sort_questions_by_most_views(qlist: list) -> list:
    """Most viewed first; equal view counts keep newest-first order."""
    return sorted(
        sort_questions_by_newest(qlist),
        key=lambda q: len(q.get("views", [])),
        reverse=True,
    )


def sort_questions_by_saved(qlist: list, saved_ids: list) -> list:
    """Newest-first questions whose id is in ``saved_ids``."""
    saved = set(saved_ids)
    return [q for q in sort_questions_by_newest(qlist) if str(q["_id"]) in saved]


def calculate_trending_score(question: dict, now: datetime, window: timedelta = TRENDING_WINDOW) -> float:
    threshold = now - window
    recent_up = sum(1 for v in question.get("upVotes", []) if v["timestamp"] > threshold)
    recent_down = sum(1 for v in question.get("downVotes", []) if v["timestamp"] > threshold)
    # first recent downvote is free
    return recent_up * 1.5 - max(0, recent_down - 1)


def sort_questions_by_trending(qlist: list, now: datetime | None = None, window: timedelta = TRENDING_WINDOW) -> list:
    now = now or datetime.utcnow()
    return sorted(qlist, key=lambda q: calculate_trending_score(q, now, window), reverse=True)
