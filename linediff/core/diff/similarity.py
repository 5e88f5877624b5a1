"""
Edit distance scoring for pairs of lines.

Strings are compared code point by code point, so results do not depend
on how a platform encodes text internally.
"""

from __future__ import annotations


def levenshtein_distance(first: str, second: str) -> int:
    """
    Minimum number of single-character insertions, deletions and
    substitutions that turn `first` into `second`.
    """
    m = len(first)
    n = len(second)

    # dp[i][j] = distance between first[:i] and second[:j]
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i

    for j in range(n + 1):
        dp[0][j] = j

    if m > 0 and n > 0:
        for i in range(1, m + 1):
            for j in range(1, n + 1):
                if first[i - 1] == second[j - 1]:
                    dp[i][j] = dp[i - 1][j - 1]
                else:
                    dp[i][j] = min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1]) + 1

    return dp[m][n]


def calculate_similarity(first: str, second: str) -> float:
    """
    Normalized similarity between two strings.

    Returns 1.0 for identical strings (including two empty strings) and
    0.0 when every character of the longer string has to change.
    """
    longer_length = max(len(first), len(second))

    if longer_length == 0:
        return 1.0

    distance = levenshtein_distance(first, second)
    return (longer_length - distance) / longer_length
