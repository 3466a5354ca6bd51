"""OpenAI-compatible chat completions client for dish identification."""

from dataclasses import dataclass

import httpx
import openai
from openai import AsyncOpenAI

from foodvision.services.identification import DishModelClient, UpstreamFailure


@dataclass
class OpenAIDishClient(DishModelClient):
    """Dish model client backed by the chat completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, base_url: str | None = None, timeout: float = 60.0
    ) -> "OpenAIDishClient":
        """Create a client for OpenAI or any compatible gateway.

        SDK retries are disabled; retry policy belongs to the caller.
        """
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                http_client=httpx.AsyncClient(timeout=timeout),
            )
        )

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        image_data_url: str,
    ) -> str | None:
        """Send the image with fixed instructions and return the raw answer."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "image_url",
                                "image_url": {"url": image_data_url},
                            },
                        ],
                    },
                ],
            )
        except openai.APIStatusError as exc:
            raise UpstreamFailure(
                str(exc), status_code=exc.status_code, code=_error_code(exc)
            ) from exc
        except openai.APIConnectionError as exc:
            raise UpstreamFailure(str(exc)) from exc

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _error_code(exc: openai.APIStatusError) -> str | None:
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return code
    body = exc.body
    if isinstance(body, dict):
        nested = body.get("error", body)
        if isinstance(nested, dict) and isinstance(nested.get("code"), str):
            return nested["code"]
    return None
