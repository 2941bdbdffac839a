from __future__ import annotations
from collections import Counter, defaultdict
from collections.abc import Iterable
import logging

from PySubconvert.Diagnostics.ContentLines import ContentLine
from PySubconvert.Helpers.Text import FindHanRuns
from PySubconvert.SubtitleIssue import FILE_LEVEL, IssueCategory, SubtitleIssue

TERM_LENGTHS = (3, 4)
WILDCARD = '*'

class ConsistencyClusterer:
    """
    Finds terms that appear to be the same concept rendered two different ways.

    Every run of 3 and 4 consecutive Han characters is counted across the file,
    and every pair of distinct terms of the same length that differ in exactly one
    position is reported once.

    Pairs are found by bucketing each term under a wildcard key per position, so
    the work grows with the vocabulary rather than its square. The vocabulary is
    still capped to the most frequent terms for very large inputs.
    """
    def __init__(self, max_terms : int|None = 5000, term_lengths : tuple[int, ...] = TERM_LENGTHS):
        self.max_terms = max_terms
        self.term_lengths = term_lengths

    def collect_terms(self, texts : Iterable[str]) -> Counter[str]:
        terms : Counter[str] = Counter()
        for text in texts:
            for run in FindHanRuns(text):
                for length in self.term_lengths:
                    for start in range(len(run) - length + 1):
                        terms[run[start:start + length]] += 1
        return terms

    def find_variants(self, terms : Counter[str]) -> list[tuple[str, str]]:
        """
        Find every pair of terms that differ in exactly one character position
        """
        vocabulary = list(terms)
        if self.max_terms and len(vocabulary) > self.max_terms:
            logging.warning(f"Consistency check limited to the {self.max_terms} most frequent of {len(vocabulary)} terms")
            vocabulary = [ term for term, _ in terms.most_common(self.max_terms) ]

        buckets : defaultdict[str, list[str]] = defaultdict(list)
        for term in vocabulary:
            for index in range(len(term)):
                buckets[term[:index] + WILDCARD + term[index + 1:]].append(term)

        pairs : set[tuple[str, str]] = set()
        for bucket in buckets.values():
            if len(bucket) < 2:
                continue

            for i, first in enumerate(bucket):
                for second in bucket[i + 1:]:
                    pairs.add((min(first, second), max(first, second)))

        return sorted(pairs)

    def cluster(self, content_lines : Iterable[ContentLine]) -> list[SubtitleIssue]:
        terms = self.collect_terms(content.text for content in content_lines)
        return [
            SubtitleIssue(FILE_LEVEL, f"[Consistency] Term rendered inconsistently: '{first}' ({terms[first]}x) / '{second}' ({terms[second]}x)", IssueCategory.ADVISORY)
            for first, second in self.find_variants(terms)
        ]
