"""Dual-coding prompts: pair a card with visual and verbal study cues."""

import re
from dataclasses import dataclass, field

from cardwise.domain.models import Card

_FORMULA_HINT = re.compile(r"[=+\-×÷]")
_WORD_SPLIT = re.compile(r"[\s,.;:]+")


@dataclass(frozen=True)
class DualCodingConfig:
    enable_visual: bool = True
    enable_verbal: bool = True
    visual_prompt: str | None = None
    verbal_prompt: str | None = None


@dataclass(frozen=True)
class DualCodingCard:
    id: str
    front: str
    back: str
    visual_description: str
    verbal_summary: str
    mnemonic: str
    config: DualCodingConfig = field(default_factory=DualCodingConfig)


def format_dual_coding_card(card: Card, config: DualCodingConfig | None = None) -> DualCodingCard:
    cfg = config or DualCodingConfig()
    front = card.front or ""
    back = card.back or ""

    return DualCodingCard(
        id=card.id,
        front=front,
        back=back,
        visual_description=_visual_description(front, back, cfg) if cfg.enable_visual else "",
        verbal_summary=_verbal_summary(back, cfg) if cfg.enable_verbal else "",
        mnemonic=(
            f'Remember the first letter "{front[:1]}" of "{front[:15]}..." '
            "and link it to the key words of the answer."
        ),
        config=cfg,
    )


def _visual_description(front: str, back: str, cfg: DualCodingConfig) -> str:
    if cfg.visual_prompt:
        return cfg.visual_prompt

    lowered = front.lower()
    if "formula" in lowered or _FORMULA_HINT.search(back):
        return f'Draw "{back}" as a formula diagram, placing each variable visually.'
    if "process" in lowered or "step" in lowered:
        return "Sketch the process as a step-by-step flowchart."
    return f'Capture the core idea of "{front[:30]}..." in a simple picture or diagram.'


def _verbal_summary(back: str, cfg: DualCodingConfig) -> str:
    if cfg.verbal_prompt:
        return cfg.verbal_prompt

    words = [w for w in _WORD_SPLIT.split(back) if len(w) > 2]
    keywords = ", ".join(words[:5])
    return f"Key words: {keywords}. Explain the concept in one sentence using them."
