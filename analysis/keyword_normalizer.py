"""
Keyword normalization and row-local deduplication.

A raw keyword field such as ``"Payroll, payrolls , Onboarding"`` becomes
``["payroll", "onboarding"]``: tokens are lowercased and trimmed, and a
token is dropped when an earlier token in the same field is an exact
match or a near-duplicate (plural or substring variant).
"""
from typing import List, Optional, Tuple
from dataclasses import dataclass, field

# Shorter token must be longer than 2 chars for the substring rule
MIN_SUBSTRING_LENGTH = 3


def split_keywords(raw: Optional[str]) -> List[str]:
    """
    Split a raw keyword field into lowercase trimmed tokens.

    Args:
        raw: Comma-separated keyword string (may be None)

    Returns:
        Non-empty tokens in their original order
    """
    if not raw:
        return []

    tokens = [piece.strip() for piece in raw.lower().split(",")]
    return [token for token in tokens if token]


def is_similar(
    candidate: str,
    accepted: str,
    min_substring_length: int = MIN_SUBSTRING_LENGTH
) -> bool:
    """
    Check whether two tokens are near-duplicates.

    Tokens are similar when the shorter one is contained in the longer
    one and is at least ``min_substring_length`` long, or when one is
    the other plus a trailing ``s``.

    Args:
        candidate: Token being considered
        accepted: Token already kept for the row
        min_substring_length: Minimum length for the substring rule

    Returns:
        True if the candidate should be suppressed
    """
    if len(candidate) < len(accepted):
        shorter, longer = candidate, accepted
    else:
        shorter, longer = accepted, candidate

    if len(shorter) >= min_substring_length and shorter in longer:
        return True

    # Plural/singular
    if candidate.endswith("s") and accepted == candidate[:-1]:
        return True
    if accepted.endswith("s") and candidate == accepted[:-1]:
        return True

    return False


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing one keyword field."""

    keywords: Tuple[str, ...]
    # (suppressed variant, kept token that caused it)
    suppressed: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def kept_count(self) -> int:
        return len(self.keywords)

    @property
    def suppressed_count(self) -> int:
        return len(self.suppressed)


class KeywordNormalizer:
    """
    Converts a raw keyword field into a deduplicated token list.

    Deduplication is local to one field; the first-seen form of a
    near-duplicate group is kept.
    """

    def __init__(self, min_substring_length: int = MIN_SUBSTRING_LENGTH):
        """
        Initialize normalizer.

        Args:
            min_substring_length: Minimum length of the shorter token
                for the substring rule to apply
        """
        self.min_substring_length = min_substring_length

    def normalize(self, raw: Optional[str]) -> List[str]:
        """
        Normalize a raw keyword string.

        Args:
            raw: Comma-separated keyword string (may be None)

        Returns:
            Accepted tokens in first-seen order
        """
        return list(self.normalize_with_details(raw).keywords)

    def normalize_with_details(
        self,
        raw: Optional[str]
    ) -> NormalizationResult:
        """
        Normalize a raw keyword string and report what was suppressed.

        Args:
            raw: Comma-separated keyword string (may be None)

        Returns:
            NormalizationResult with kept tokens and suppressed variants
        """
        accepted: List[str] = []
        seen = set()
        suppressed: List[Tuple[str, str]] = []

        for token in split_keywords(raw):
            if token in seen:
                suppressed.append((token, token))
                continue

            match = self._find_similar(token, accepted)
            if match is not None:
                suppressed.append((token, match))
                continue

            accepted.append(token)
            seen.add(token)

        return NormalizationResult(
            keywords=tuple(accepted),
            suppressed=tuple(suppressed)
        )

    def _find_similar(
        self,
        candidate: str,
        accepted: List[str]
    ) -> Optional[str]:
        """Return the first accepted token similar to candidate."""
        for kept in accepted:
            if is_similar(candidate, kept, self.min_substring_length):
                return kept
        return None
