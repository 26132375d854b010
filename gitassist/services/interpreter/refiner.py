"""AI rewriting of issue descriptions and release notes."""

from gitassist.services.interpreter.base import BaseInterpreter, RefinementError
from gitassist.services.interpreter.types import REFINE_CONTEXTS, RefinedText, RefineInput


class DescriptionRefiner(BaseInterpreter[RefineInput, RefinedText]):
    """Polishes user-written text for a GitHub issue or release notes.

    Keeps the meaning; fixes grammar, structure and tone.
    """

    def get_system_prompt(self, input_data: RefineInput) -> str:
        return f"""You are an expert technical writer. Your task is to refine text provided by a user for a GitHub {input_data.context}.

Improve the text by:
- Correcting spelling and grammar
- Improving clarity and conciseness
- Structuring it logically (Markdown lists, code blocks where useful)
- Keeping a professional, clear tone
- For an issue: clearly describe the problem, steps to reproduce, and expected behavior
- For release notes: organize by new features, bug fixes, and other changes

Do NOT change the core meaning of the user's text. Only enhance its presentation and clarity.

OUTPUT: Write ONLY the refined text. No preamble, no labels, no surrounding quotes."""

    def format_input(self, input_data: RefineInput) -> str:
        return f"Original Text:\n'''\n{input_data.text}\n'''"

    def parse_output(self, response_text: str) -> RefinedText:
        refined = response_text.strip()

        # Remove any accidental prefixes the model might add
        prefixes_to_remove = ["Refined Text:", "Refined text:", "Here is the refined text:"]
        for prefix in prefixes_to_remove:
            if refined.startswith(prefix):
                refined = refined[len(prefix):].strip()

        if refined.startswith("'''") and refined.endswith("'''") and len(refined) >= 6:
            refined = refined[3:-3].strip()

        if not refined:
            raise RefinementError("AI refinement returned an empty response")
        return RefinedText(refined_text=refined, raw_response=response_text)

    async def refine(self, text: str, context: str) -> str:
        """
        Rewrite ``text`` for the given context ("issue" or "release notes").

        Raises:
            ValueError: For an unknown context or blank text
            RefinementError: If the AI call fails
        """
        if context not in REFINE_CONTEXTS:
            raise ValueError(f"Unknown refine context: {context!r}")
        if not text.strip():
            raise ValueError("Text to refine is empty")

        result = await self.interpret(RefineInput(text=text, context=context))  # type: ignore[arg-type]
        return result.refined_text


# Singleton instance
description_refiner = DescriptionRefiner()
