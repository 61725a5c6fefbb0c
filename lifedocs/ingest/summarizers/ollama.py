"""Document summarizer backed by an Ollama model.

Asks the model for a single-sentence summary and a short title, summary first,
separated by a newline, and parses the two lines out of the completion.
"""

import logging
import re

import httpx
import ollama

from lifedocs.common.resilience import resilient_async_call
from lifedocs.core.errors import SummarizationError
from lifedocs.core.ports.summarizer import DocumentSummarizer
from lifedocs.schemas.models import SummaryResult

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Summarize the following text in a single sentence that is less than {max_chars} "
    "characters and give it a title that is less than {max_words} words. Please give me "
    "the summary first before the title and separate them with a newline character:"
    "\n\n{text}"
)

_LABEL = re.compile(r"^\**\s*(summary|title)\s*\**\s*:\s*\**\s*", re.IGNORECASE)


def parse_summary_response(completion: str) -> SummaryResult:
    """Split a completion into summary and title.

    Blank lines are ignored. Lines labelled ``Summary:`` / ``Title:`` are matched
    by label; otherwise the first line is the summary and the second the title.

    Raises:
        SummarizationError: If fewer than two non-blank lines are present.
    """
    labelled: dict[str, str] = {}
    values: list[str] = []
    for raw_line in completion.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        match = _LABEL.match(line)
        value = line[match.end() :].strip().strip("*").strip() if match else line
        if not value:
            continue
        if match:
            labelled.setdefault(match.group(1).lower(), value)
        values.append(value)

    if "summary" in labelled and "title" in labelled:
        return SummaryResult(summary=labelled["summary"], title=labelled["title"])

    if len(values) < 2:
        raise SummarizationError(
            f"Expected summary and title lines, got {len(values)} line(s)"
        )

    return SummaryResult(summary=values[0], title=values[1])


class OllamaDocumentSummarizer(DocumentSummarizer):
    """Ollama LLM client producing a summary and title for extracted text.

    Attributes:
        model: Ollama model name.
        summary_char_max_length: Summary length requested in the prompt.
        title_word_limit: Title length requested in the prompt.
    """

    def __init__(
        self,
        model: str = "llama2",
        host: str | None = None,
        client: ollama.AsyncClient | None = None,
        summary_char_max_length: int = 200,
        title_word_limit: int = 10,
        max_attempts: int = 1,
        retry_max_wait: float = 10,
    ) -> None:
        """Initialize the summarizer.

        Args:
            model: Ollama model name (default: llama2).
            host: Ollama server URL; ignored when client is given.
            client: Shared ollama.AsyncClient.
            summary_char_max_length: Maximum summary characters asked for.
            title_word_limit: Maximum title words asked for.
            max_attempts: Attempts per call; connection errors are retried.
            retry_max_wait: Upper bound in seconds on the backoff between attempts.
        """
        self.model = model
        self.summary_char_max_length = summary_char_max_length
        self.title_word_limit = title_word_limit
        self.max_attempts = max_attempts
        self.retry_max_wait = retry_max_wait
        self._owns_client = client is None
        self._client = client or ollama.AsyncClient(host=host)

        logger.info(f"Initialized OllamaDocumentSummarizer (model={model})")

    def build_prompt(self, text: str) -> str:
        return PROMPT_TEMPLATE.format(
            max_chars=self.summary_char_max_length,
            max_words=self.title_word_limit,
            text=text,
        )

    async def summarize(self, text: str) -> SummaryResult:
        """Summarize ``text`` and derive a title.

        Raises:
            SummarizationError: On model/transport failure or an unparseable completion.
        """
        logger.info("Requesting summary", extra={"model": self.model, "chars": len(text)})

        try:
            response = await resilient_async_call(
                self._client.generate,
                model=self.model,
                prompt=self.build_prompt(text),
                max_attempts=self.max_attempts,
                min_wait=0,
                max_wait=self.retry_max_wait,
                retry_on=(httpx.TransportError, ConnectionError),
            )
        except ollama.ResponseError as e:
            logger.error("Ollama rejected summary request", extra={"error": e.error})
            raise SummarizationError(f"Ollama error ({e.status_code}): {e.error}") from e
        except (httpx.HTTPError, ConnectionError) as e:
            logger.error("Ollama unreachable", extra={"error": str(e)})
            raise SummarizationError(f"Ollama request failed: {e}") from e

        result = parse_summary_response(response["response"])
        logger.info(
            "Summary generated",
            extra={"title": result.title, "summary_chars": len(result.summary)},
        )
        return result

    async def aclose(self) -> None:
        """Close the Ollama client if this summarizer created it."""
        if self._owns_client:
            await self._client.close()


__all__ = ["OllamaDocumentSummarizer", "PROMPT_TEMPLATE", "parse_summary_response"]
