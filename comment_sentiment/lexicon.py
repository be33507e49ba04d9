"""
Word lists and emoji classes used by the sentiment scorer.

All sets are module-level frozensets: built once on import and shared
read-only by every scoring call.
"""

from itertools import combinations


POSITIVE_WORDS = frozenset({
    "good", "great", "awesome", "amazing", "love", "loved", "like", "liked",
    "fantastic", "excellent", "best", "nice", "happy", "joy", "glad",
    "wonderful", "helpful", "brilliant", "recommend", "cool",
})

NEGATIVE_WORDS = frozenset({
    "bad", "terrible", "awful", "hate", "hated", "dislike", "disliked",
    "worst", "poor", "sad", "angry", "disappointed", "disappointing",
    "broken", "bug", "spam", "boring", "annoying", "trash", "waste",
})

NEGATIONS = frozenset({
    "not", "never", "no", "dont", "doesnt", "didnt", "isnt", "wasnt",
    "cant", "cannot", "wont", "won't",
})

INTENSIFIERS = frozenset({
    "very", "really", "extremely", "super", "totally", "completely",
    "absolutely", "so",
})

# Single code points only: the scorer walks text one code point at a time,
# so a glyph followed by U+FE0F still counts through its base character.
POSITIVE_EMOJI = frozenset({
    "😊", "😃", "😄", "😁", "🙂", "😀", "😍", "🥰", "😘",
    "🤗", "🎉", "👍", "❤", "💖", "✨", "🌟", "💯",
})

NEGATIVE_EMOJI = frozenset({
    "😢", "😭", "😞", "😔", "☹", "🙁", "😣", "😖", "😫",
    "😩", "😤", "😠", "😡", "💔", "👎",
})

NEUTRAL_EMOJI = frozenset({"😐", "😑", "🤔", "😶", "🙄", "🤷"})


WORD_SETS = {
    "positive_words": POSITIVE_WORDS,
    "negative_words": NEGATIVE_WORDS,
    "negations": NEGATIONS,
    "intensifiers": INTENSIFIERS,
}

EMOJI_SETS = {
    "positive_emoji": POSITIVE_EMOJI,
    "negative_emoji": NEGATIVE_EMOJI,
    "neutral_emoji": NEUTRAL_EMOJI,
}


def find_overlaps(named_sets: dict[str, frozenset]) -> list[tuple[str, str, set[str]]]:
    """
    Find entries shared between any two of the given sets.

    Scoring is ambiguous for a token listed in two sets, so the word lists
    and emoji classes are expected to be pairwise disjoint.

    Args:
        named_sets: Mapping of set name to set

    Returns:
        List of (first_name, second_name, shared_entries), empty when disjoint
    """
    overlaps = []
    for (name_a, set_a), (name_b, set_b) in combinations(named_sets.items(), 2):
        shared = set(set_a & set_b)
        if shared:
            overlaps.append((name_a, name_b, shared))
    return overlaps
