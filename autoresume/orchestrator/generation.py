# autoresume/orchestrator/generation.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Awaitable, Callable, Optional

from autoresume.errors import (
    AutoResumeError,
    EmptyResponseError,
    GenerationError,
    GenerationTimeoutError,
    InvalidCredentialError,
    ModelNotFoundError,
    NoModelSelectedError,
    RateLimitError,
    ServiceUnavailableError,
)
from autoresume.llm.client import generate_text
from autoresume.llm.prompts import build_tailor_prompt
from autoresume.settings import SETTINGS
from autoresume.storage.models import ModelCredential, Output, ProjectConfig
from autoresume.storage.project_store import ProjectStore
from autoresume.utils.dates import output_stamp

logger = logging.getLogger(__name__)

TextClient = Callable[[ModelCredential, str], Awaitable[str]]

# checked in this order; first match wins
_INVALID_KEY_MARKERS = ("invalid api key", "incorrect api key", "invalid x-api-key", "authentication")
_RATE_LIMIT_MARKERS = ("rate limit", "too many requests")
_MODEL_NOT_FOUND_MARKERS = ("model not found", "does not exist", "not_found_error")
_UNAVAILABLE_MARKERS = ("connection refused", "connection error", "failed to establish")


def classify_error(exc: BaseException, credential: ModelCredential) -> GenerationError:
    """Map a client failure onto the generation error family by its text."""
    if isinstance(exc, GenerationError):
        return exc
    text = str(exc).lower()
    if any(m in text for m in _INVALID_KEY_MARKERS):
        return InvalidCredentialError(credential.provider, cause=exc)
    if any(m in text for m in _RATE_LIMIT_MARKERS):
        return RateLimitError(credential.provider, cause=exc)
    if any(m in text for m in _MODEL_NOT_FOUND_MARKERS):
        return ModelNotFoundError(credential.provider, credential.model, cause=exc)
    if any(m in text for m in _UNAVAILABLE_MARKERS):
        return ServiceUnavailableError(credential.provider, cause=exc)
    return GenerationError(exc)


@dataclass(frozen=True)
class GenerationRequest:
    """Values captured when Generate was pressed; later edits do not reach the call."""
    project_path: Path
    resume_text: str
    job_description: str
    credential: Optional[ModelCredential]


@dataclass(frozen=True)
class GenerationFinished:
    """Completion event posted back to the UI loop; exactly one of output/error is set."""
    project_path: Path
    output: Optional[Output] = None
    error: Optional[AutoResumeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GenerationService:
    def __init__(
        self,
        client: TextClient = generate_text,
        project_store: Optional[ProjectStore] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.project_store = project_store or ProjectStore()
        self.timeout = SETTINGS.generation_timeout if timeout is None else timeout

    async def generate(
        self,
        resume_text: str,
        job_description: str,
        credential: Optional[ModelCredential],
    ) -> Output:
        if credential is None:
            raise NoModelSelectedError()
        # the credential is a snapshot; copy it so the caller's record is never shared
        credential = replace(credential)

        prompt = build_tailor_prompt(resume_text, job_description)
        logger.info("Generating with %s/%s", credential.provider, credential.model)
        try:
            call = self.client(credential, prompt)
            if self.timeout and self.timeout > 0:
                text = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                text = await call
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(credential.provider, self.timeout) from e
        except Exception as e:
            classified = classify_error(e, credential)
            logger.warning("Generation failed (%s): %s", type(classified).__name__, e)
            raise classified from e

        if not text:
            raise EmptyResponseError()
        return Output(
            name=output_stamp(),
            job_description=job_description,
            generated_text=text,
        )

    async def run(self, request: GenerationRequest) -> GenerationFinished:
        """Never raises: every outcome becomes a GenerationFinished event."""
        try:
            output = await self.generate(
                request.resume_text, request.job_description, request.credential
            )
        except AutoResumeError as e:
            return GenerationFinished(request.project_path, error=e)
        except Exception as e:
            logger.exception("Unexpected generation failure")
            return GenerationFinished(request.project_path, error=GenerationError(e))
        logger.info("Generated output %r (%d chars)", output.name, len(output.generated_text))
        return GenerationFinished(request.project_path, output=output)

    def record(self, project_path: Path, config: ProjectConfig, output: Output) -> ProjectConfig:
        """Append the output and persist; returns the new config, `config` itself is untouched."""
        updated = replace(config, outputs=[*config.outputs, output])
        self.project_store.save(project_path, updated)
        return updated
