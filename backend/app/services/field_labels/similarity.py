"""
Similarity scoring between a decomposed field name and a line of page text.
"""
from .field_names import FieldNameParts

# Shortest word prefix that counts as a partial match
MIN_PREFIX_LENGTH = 3


def word_score(word: str, text_lower: str) -> float:
    """
    Score one field-name word against lowercased text.

    A whole-word substring hit scores 1.0. Otherwise the longest prefix of at
    least MIN_PREFIX_LENGTH characters found in the text scores
    prefix_length / word_length.
    """
    word_lower = word.lower()
    if word_lower in text_lower:
        return 1.0

    if len(word_lower) < MIN_PREFIX_LENGTH:
        return 0.0

    best = 0
    for length in range(MIN_PREFIX_LENGTH, len(word_lower) + 1):
        if word_lower[:length] not in text_lower:
            # Longer prefixes contain this one, so they cannot match either
            break
        best = length
    return best / len(word_lower)


def calculate_similarity(parts: FieldNameParts, text: str) -> float:
    """
    Average word score of a field name against a candidate label.

    Args:
        parts: Decomposed field name
        text: Candidate label text

    Returns:
        Score in [0, 1]; 0 when the name has no words
    """
    if not parts.words:
        return 0.0

    text_lower = text.lower()
    total = sum(word_score(word, text_lower) for word in parts.words)
    return total / len(parts.words)
