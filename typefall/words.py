from __future__ import annotations

import random
from typing import List, Optional

# ---------------------------
# Word source (offline)
# ---------------------------

CONTENT_MODES = ["words", "quotes"]

COMMON_WORDS = [
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "it",
    "for", "not", "on", "with", "he", "as", "you", "do", "at", "this",
    "but", "his", "by", "from", "they", "we", "say", "her", "she", "or",
    "an", "will", "my", "one", "all", "would", "there", "their", "what",
    "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
    "when", "make", "can", "like", "time", "no", "just", "him", "know",
    "take", "people", "into", "year", "your", "good", "some", "could",
    "them", "see", "other", "than", "then", "now", "look", "only", "come",
    "its", "over", "think", "also", "back", "after", "use", "two", "how",
    "our", "work", "first", "well", "way", "even", "new", "want", "because",
    "any", "these", "give", "day", "most", "us", "great", "between", "need",
    "large", "under", "never", "each", "right", "hand", "high", "place",
    "small", "found", "still", "own", "light", "word", "went", "last",
    "long", "much", "before", "turn", "move", "real", "left",
    "same", "being", "world", "house", "point", "home", "old", "number",
    "start", "show", "every", "part", "find", "here", "thing", "many",
    "head", "name", "very", "through", "form", "line",
    "water", "been", "call", "keep", "while", "next", "program", "change",
    "room", "group", "begin", "might", "story", "along", "children", "city",
    "earth", "eye", "run", "quite", "close", "night", "open", "life",
    "walk", "white", "got", "read", "port", "spell",
    "add", "land", "must", "big", "act", "why", "ask", "men",
    "air", "away", "animal", "again", "study", "help", "should", "late",
    "above", "paper", "near", "grow", "food", "learn", "plant", "cover",
    "state", "set", "try", "face", "watch", "car", "seem", "sea", "draw",
    "hard", "let", "stop", "without", "second", "tree", "cross",
    "since", "pick", "fast", "several", "hold", "himself", "toward",
    "five", "step", "morning", "pass", "power", "town", "fine", "true",
    "hundred", "area", "table", "strong", "special", "mind", "behind",
    "clear", "ball", "best", "better", "dark", "rest", "early", "sort",
    "told", "money", "river", "class", "nothing", "age", "check", "game",
]

QUOTES = [
    "The only way to do great work is to love what you do",
    "In the middle of difficulty lies opportunity",
    "Not all those who wander are lost",
    "The future belongs to those who believe in the beauty of their dreams",
    "It does not do to dwell on dreams and forget to live",
    "In three words I can sum up everything I learned about life it goes on",
    "The greatest glory in living lies not in never falling but in rising every time we fall",
    "Life is what happens when you are busy making other plans",
    "The way to get started is to quit talking and begin doing",
    "If you look at what you have in life you will always have more",
    "You must be the change you wish to see in the world",
    "The only thing we have to fear is fear itself",
    "Do one thing every day that scares you",
    "Well done is better than well said",
    "The best time to plant a tree was twenty years ago the second best time is now",
    "An unexamined life is not worth living",
    "If life were predictable it would cease to be life and be without flavor",
    "Life is a succession of lessons which must be lived to be understood",
]


def build_quote_words(min_count: int, rng: Optional[random.Random] = None) -> List[str]:
    """Split random quotes into words until at least `min_count` are collected."""
    rng = rng or random.Random()
    words: List[str] = []
    while len(words) < min_count:
        words.extend(rng.choice(QUOTES).split())
    return words


class WordSource:
    """Hands out words for the selected content mode."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def next_word(self, mode: str) -> str:
        if mode == "quotes":
            return self.rng.choice(build_quote_words(50, self.rng))
        return self.rng.choice(COMMON_WORDS)

    def words(self, mode: str, count: int) -> List[str]:
        if mode == "quotes":
            return build_quote_words(count, self.rng)
        return [self.rng.choice(COMMON_WORDS) for _ in range(count)]
