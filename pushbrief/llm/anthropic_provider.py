"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from pushbrief.llm.base import BaseLLMProvider
from pushbrief.llm.exceptions import LLMError, MissingAPIKeyError
from pushbrief.llm.models import LLMResult


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    name = "Anthropic"

    def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = True) -> LLMResult:
        # The Messages API has no JSON mode; the prompts ask for JSON only
        api_key = self.get_api_key()

        client = Anthropic(api_key=api_key)

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )

            raw_response = message.content[0].text
            input_tokens = message.usage.input_tokens
            output_tokens = message.usage.output_tokens

        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        return LLMResult(
            text=raw_response,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
