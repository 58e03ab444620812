import re


MAX_LINKS = 5

LINK_REGEX = re.compile(r"https?://", re.IGNORECASE)
BLOCKLIST_REGEX = re.compile(r"viagra|escort|forex|crypto|porn|loan|investment", re.IGNORECASE)


def count_links(message: str) -> int:
    return len(LINK_REGEX.findall(message))


def is_spam(message: str) -> bool:
    return count_links(message) > MAX_LINKS or BLOCKLIST_REGEX.search(message) is not None
