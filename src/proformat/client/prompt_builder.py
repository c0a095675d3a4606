"""Prompt construction for formatting requests"""  # noqa: D415

from proformat.core.types import FormattingOptions

GRAMMAR_FIX_DIRECTIVE = "Yes, ensure perfect grammar and punctuation."
GRAMMAR_PRESERVE_DIRECTIVE = "No, keep original phrasing mostly intact."
SUMMARY_DIRECTIVE = "Yes, add a brief executive summary at the top."
NO_SUMMARY_DIRECTIVE = "No."
RAW_TEXT_MARKER = "Raw Text:"

_TEMPLATE = """\
You are an expert professional editor and document formatter.
Your task is to take the provided raw text and rewrite/format it to be highly professional and visually structured using Markdown.

Configuration:
- Tone: {tone}
- Fix Grammar: {grammar}
- Include Summary: {summary}

Instructions:
1. Use Markdown headers (#, ##, ###) to organize sections logically.
2. Use bullet points or numbered lists to break up dense paragraphs.
3. Use bolding (**text**) for key terms or emphasis, but do not overuse it.
4. Ensure the output is ready to be copied into a professional document or email.
5. Do NOT include any conversational filler before or after the content (e.g., "Here is your formatted text"). Just provide the formatted content.

{marker}
{text}"""


class PromptBuilder:
    """Builds the instruction string sent to the generation service.

    ``build`` is pure: identical inputs always produce identical prompts, so
    requests can be replayed and tested without the service. Callers must not
    pass empty or whitespace-only text.
    """

    def build(self, raw_text: str, options: FormattingOptions) -> str:
        """Return the prompt for ``raw_text`` formatted according to ``options``"""  # noqa: D415
        return _TEMPLATE.format(
            tone=options.tone.value,
            grammar=(
                GRAMMAR_FIX_DIRECTIVE
                if options.fix_grammar
                else GRAMMAR_PRESERVE_DIRECTIVE
            ),
            summary=SUMMARY_DIRECTIVE if options.include_summary else NO_SUMMARY_DIRECTIVE,
            marker=RAW_TEXT_MARKER,
            text=raw_text,
        )
