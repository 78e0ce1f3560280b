"""OpenAI (and OpenAI-compatible) provider implementation."""

from openai import OpenAI

from pushbrief.llm.base import BaseLLMProvider
from pushbrief.llm.exceptions import LLMError, MissingAPIKeyError
from pushbrief.llm.models import LLMResult


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider.

    A base_url in the settings points the client at any OpenAI-compatible API.
    """

    name = "OpenAI"

    def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = True) -> LLMResult:
        api_key = self.get_api_key()

        client = OpenAI(api_key=api_key, base_url=self.settings.base_url)

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )

            raw_response = response.choices[0].message.content or ""
            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        return LLMResult(
            text=raw_response,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
