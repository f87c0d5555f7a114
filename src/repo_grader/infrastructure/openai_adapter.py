"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APITimeoutError, AsyncOpenAI, AuthenticationError, RateLimitError

from repo_grader.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    The client is built with ``max_retries=0``: a failed call is never
    repeated, the caller falls back to heuristic scoring instead.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        *,
        timeout: float = 60.0,
        json_mode: bool = True,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0, timeout=timeout)
        self._model = model
        self._json_mode = json_mode

    async def complete(self, prompt: str) -> str:
        """Send *prompt* as a single user message and return the completion text."""
        try:
            kwargs: dict[str, object] = {
                "model": self._model,
                "messages": [{"role": "user", "content": prompt}],
            }
            if self._json_mode:
                kwargs["response_format"] = {"type": "json_object"}

            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]

            content = response.choices[0].message.content
            if not content:
                raise LlmError("LLM returned an empty response.")

            return content

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            detail = str(exc)
            logger.error("OpenAI RateLimitError: %s", detail)
            raise LlmError(f"OpenAI rate limit / quota error: {detail}") from exc

        except APITimeoutError as exc:
            raise LlmError("OpenAI request timed out.") from exc

        except LlmError:
            raise

        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
