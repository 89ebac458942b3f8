"""
Lexicon-based sentiment classifier.

Scores comments with weighted word and emoji lexicons tuned for citizen
feedback on public projects (roads, clinics, schools). Deterministic and
model-free, so it is the default backend and the one used in tests.

Usage:
    classifier = LexiconSentimentClassifier()
    result = await classifier.classify("Great progress, well done 👍")
    result.sentiment_summary  # "Positive"
"""

import re

from govhub.sentiment.classifier import SentimentClassifier, SentimentResult, summarize_scores

# Word weights: positive values lean positive, negative lean negative.
WORD_SENTIMENT: dict[str, float] = {
    # Positive
    "good": 1.0,
    "great": 1.0,
    "excellent": 1.5,
    "amazing": 1.5,
    "impressive": 1.2,
    "fantastic": 1.5,
    "happy": 1.0,
    "pleased": 1.0,
    "grateful": 1.0,
    "thank": 0.8,
    "thanks": 0.8,
    "progress": 0.5,
    "improved": 1.0,
    "improvement": 0.8,
    "completed": 0.6,
    "helpful": 1.0,
    "smooth": 0.8,
    "well": 0.5,
    "love": 1.2,
    "commend": 1.0,
    "transparent": 0.8,
    "useful": 0.8,
    "fast": 0.5,
    "safe": 0.6,
    # Negative
    "bad": -1.0,
    "poor": -1.0,
    "terrible": -1.5,
    "awful": -1.5,
    "horrible": -1.5,
    "disappointed": -1.2,
    "disappointing": -1.2,
    "abandoned": -1.2,
    "delay": -0.5,
    "delays": -0.5,
    "delayed": -0.6,
    "slow": -0.6,
    "corruption": -1.5,
    "corrupt": -1.5,
    "waste": -1.0,
    "wasted": -1.0,
    "unsafe": -1.0,
    "dangerous": -1.0,
    "broken": -1.0,
    "stalled": -1.0,
    "unfinished": -0.8,
    "substandard": -1.2,
    "angry": -1.0,
    "fraud": -1.5,
    "potholes": -0.8,
    "neglected": -1.0,
}

EMOJI_SENTIMENT: dict[str, float] = {
    "👍": 0.8,
    "👏": 0.8,
    "🎉": 0.8,
    "😊": 0.8,
    "🙏": 0.5,
    "✅": 0.5,
    "💯": 0.8,
    "👎": -0.8,
    "😡": -1.0,
    "😢": -0.6,
    "😞": -0.8,
    "❌": -0.6,
    "🤡": -0.6,
}

NEGATIONS: frozenset[str] = frozenset({
    "not", "no", "never", "hardly", "isn't", "wasn't", "aren't", "don't",
    "doesn't", "didn't", "can't", "won't", "nothing",
})

_TOKEN_PATTERN = re.compile(r"[a-z']+")


def score_text(text: str) -> tuple[float, float]:
    """
    Sum positive and negative lexicon weight in text.

    A negation word flips the polarity of the next sentiment word.

    Args:
        text: Raw comment

    Returns:
        (positive_total, negative_total), both non-negative
    """
    positive = 0.0
    negative = 0.0
    negate = False

    for token in _TOKEN_PATTERN.findall(text.lower()):
        if token in NEGATIONS:
            negate = True
            continue
        weight = WORD_SENTIMENT.get(token)
        if weight is None:
            continue
        if negate:
            weight = -weight
            negate = False
        if weight > 0:
            positive += weight
        else:
            negative += -weight

    for emoji, weight in EMOJI_SENTIMENT.items():
        occurrences = text.count(emoji)
        if not occurrences:
            continue
        if weight > 0:
            positive += weight * occurrences
        else:
            negative += -weight * occurrences

    return positive, negative


class LexiconSentimentClassifier(SentimentClassifier):
    """Classifier using WORD_SENTIMENT and EMOJI_SENTIMENT weights."""

    @property
    def name(self) -> str:
        return "lexicon"

    async def _predict(self, text: str) -> SentimentResult:
        positive, negative = score_text(text)
        total = positive + negative

        if total == 0:
            scores = {"positive": 0.0, "neutral": 1.0, "negative": 0.0}
        else:
            # More sentiment-bearing weight leaves less room for neutral
            neutral = 1.0 / (1.0 + total)
            polar = 1.0 - neutral
            scores = {
                "positive": polar * positive / total,
                "neutral": neutral,
                "negative": polar * negative / total,
            }

        label, summary = summarize_scores(scores, self._config.mixed_threshold)
        return SentimentResult(
            label=label,
            confidence=scores[label],
            sentiment_summary=summary,
            scores=scores,
        )
