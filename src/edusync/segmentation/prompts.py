"""Prompt templates for the text-segmentation oracle."""

from __future__ import annotations

PARAGRAPH_SPLIT_PROMPT = """You are an assistant specialized in article division. \
Split the article below into paragraphs.

<article>
{article}
</article>

Guidelines:
1. Look for natural breaks in topic, shifts in ideas, or transitions that mark \
where a new paragraph should start.
2. Each paragraph must be a coherent unit of text. Paragraphs should be of \
roughly equal length.
3. Use only the text of the article. Do not add, remove, or modify any \
character, including whitespace and punctuation. Concatenating your paragraphs \
must give back the article exactly.

Return ONLY valid JSON, no markdown formatting, in this shape:
{{"paragraphs": ["paragraph 1", "paragraph 2"]}}"""


UNIT_SPLIT_PROMPT = """You are an expert in Rhetorical Structure Theory (RST). \
Split the passage below into Elementary Discourse Units (EDUs) and tag each EDU \
with its discourse function.

<passage>
{paragraph}
</passage>

1. Segmentation: an EDU is a clause or simple sentence expressing a single idea \
or rhetorical function. Break "Although X, Y" into two EDUs (X and Y).

2. Tag set:
BG = Background / Context: sets the scene, definitions, timeline.
CL = Claim / Nucleus: the main assertion the author wants accepted.
EV = Evidence / Data: facts, stats, research, authorities.
EX = Example / Illustration: concrete cases or scenarios.
CS = Concession: acknowledges opposing views or limitations.
RB = Rebuttal: counters or refutes a prior view.
IM = Implication / Call-to-Action: consequences, recommendations, next steps.

3. Decision order:
Calling for action or stating consequences? IM
Stating the thesis the audience must accept? CL
Supporting a claim? Data or research is EV; a concrete case is EX.
Acknowledging limits or opponents? CS
Actively countering a view? RB
Mostly setting or definitions? BG
In "Although X, Y": X is CS; Y is RB, or CL if Y is the thesis.

4. Labeled example:
"Urban noise has worsened in recent years." BG
"We should improve nighttime construction management." CL
"City environmental reports show complaints rose 30%." EV
"For example, one neighborhood reported three incidents in a month." EX
"Critics say stricter rules could slow projects." CS
"But multi-site studies find little impact on timelines." RB
"Therefore, cease high-noise work after 10:00 p.m." IM

5. Output requirements:
- Preserve the original text exactly. Do not add, delete or change anything, \
punctuation included ("，" stays "，").
- Use exactly one tag per EDU, from the seven codes above.

Return ONLY valid JSON, no markdown formatting, in this shape:
{{"units": [{{"content": "Climate change poses significant risks.", "tag": "CL"}}, \
{{"content": "We must act now.", "tag": "IM"}}]}}"""


HIGH_EFFORT_SUFFIX = """

A previous attempt did not reproduce the passage exactly. Work carefully: \
every EDU must start exactly where the previous one ended, and no word may be \
skipped, merged, reordered or rewritten."""


def build_paragraph_prompt(article: str) -> str:
    return PARAGRAPH_SPLIT_PROMPT.format(article=article)


def build_unit_prompt(paragraph: str, *, high_effort: bool = False) -> str:
    """Unit-split prompt; ``high_effort`` adds a strictness reminder for retries."""
    prompt = UNIT_SPLIT_PROMPT.format(paragraph=paragraph)
    if high_effort:
        prompt += HIGH_EFFORT_SUFFIX
    return prompt
