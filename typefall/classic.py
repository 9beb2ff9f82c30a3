"""
Classic mode bookkeeping: a fixed list of words typed against a timer.

WPM uses the usual convention of 1 word = 5 characters. Net WPM only counts
correct characters; the space after each committed word counts as correct.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

DURATIONS = [15, 30, 60]
WORD_COUNT = 200
MAX_WORD_OVERFLOW = 5


# ---------------------------
# Typing math
# ---------------------------

def char_match_count(typed: str, target: str) -> int:
    n = min(len(typed), len(target))
    good = 0
    for i in range(n):
        if typed[i] == target[i]:
            good += 1
    return good


def compute_wpm(chars: int, elapsed_sec: float) -> float:
    if elapsed_sec <= 0:
        return 0.0
    minutes = elapsed_sec / 60.0
    return (chars / 5.0) / minutes


def split_completed_words(value: str) -> Tuple[List[str], str]:
    """
    Return (completed_words, fragment_without_spaces).
    Treat one or more spaces as delimiter.
    """
    if not value:
        return [], ""
    if " " not in value:
        return [], value

    parts = value.split(" ")
    completed = [p for p in parts[:-1] if p != ""]
    fragment = parts[-1]
    return completed, fragment


# ---------------------------
# Run state
# ---------------------------

@dataclass
class ClassicResult:
    wpm: float
    accuracy: float
    correct_chars: int
    total_chars: int
    correct_words: int
    total_words: int


class ClassicRun:
    def __init__(self, words: List[str], duration_sec: int) -> None:
        self.words = words
        self.duration_sec = duration_sec
        self.inputs: List[str] = [""] * len(words)
        self.idx = 0
        self.started_at: Optional[float] = None
        self.finished = False

    @property
    def fragment(self) -> str:
        return self.inputs[self.idx] if self.words else ""

    def start(self, now: float) -> None:
        if self.started_at is None:
            self.started_at = now

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return min(float(self.duration_sec), now - self.started_at)

    def remaining(self, now: float) -> float:
        return max(0.0, self.duration_sec - self.elapsed(now))

    def feed(self, value: str) -> str:
        """
        Consume the raw input box value. Completed words are committed and the
        trailing fragment is kept for the current word; the fragment is returned
        so the caller can put it back in the input box.
        """
        if self.finished or not self.words:
            return ""
        completed, fragment = split_completed_words(value)
        for w in completed:
            self.inputs[self.idx] = w
            if self.idx >= len(self.words) - 1:
                fragment = ""
                break
            self.idx += 1

        limit = len(self.words[self.idx]) + MAX_WORD_OVERFLOW
        fragment = fragment[:limit]
        self.inputs[self.idx] = fragment
        return fragment

    def fragment_ok(self) -> bool:
        if not self.words:
            return True
        return self.words[self.idx].startswith(self.fragment)

    def correct_chars(self) -> int:
        good = 0
        for i in range(self.idx):
            good += char_match_count(self.inputs[i], self.words[i]) + 1
        return good

    def live_wpm(self, now: float) -> float:
        elapsed = self.elapsed(now)
        if elapsed < 1:
            return 0.0
        return compute_wpm(self.correct_chars(), elapsed)

    def results(self, elapsed_sec: float) -> ClassicResult:
        elapsed_sec = max(1.0, elapsed_sec)
        correct = 0
        total = 0
        correct_words = 0

        for i in range(min(self.idx + 1, len(self.words))):
            typed = self.inputs[i]
            target = self.words[i]
            word_correct = True
            for j, ch in enumerate(target):
                total += 1
                if j < len(typed) and typed[j] == ch:
                    correct += 1
                else:
                    word_correct = False

            # overflow characters count as errors
            if len(typed) > len(target):
                total += len(typed) - len(target)
                word_correct = False

            if i < self.idx:
                total += 1
                correct += 1

            if word_correct and len(typed) == len(target):
                correct_words += 1

        accuracy = (correct / total * 100.0) if total else 0.0
        return ClassicResult(
            wpm=round(max(0.0, compute_wpm(correct, elapsed_sec)), 1),
            accuracy=round(accuracy, 1),
            correct_chars=correct,
            total_chars=total,
            correct_words=correct_words,
            total_words=self.idx + 1,
        )
