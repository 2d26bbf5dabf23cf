"""Generate request and response models."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, model_serializer


class Runner(BaseModel):
    """Runner options, sent flattened into the options object."""
    model_config = ConfigDict(frozen=True)

    numa: Optional[bool] = None
    num_ctx: Optional[int] = None
    num_batch: Optional[int] = None
    num_gqa: Optional[int] = None
    num_gpu: Optional[int] = None
    main_gpu: Optional[int] = None
    low_vram: Optional[bool] = None
    f16_kv: Optional[bool] = None
    logits_all: Optional[bool] = None
    vocab_only: Optional[bool] = None
    use_mmap: Optional[bool] = None
    use_mlock: Optional[bool] = None
    embedding_only: Optional[bool] = None
    rope_frequency_base: Optional[float] = None
    rope_frequency_scale: Optional[float] = None
    num_thread: Optional[int] = None


class Options(BaseModel):
    """Model tuning options.

    Values are passed to the server as given. Keys not declared here are
    accepted and sent along unchanged.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    num_keep: Optional[int] = None
    seed: Optional[int] = None
    num_predict: Optional[int] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None
    tfs_z: Optional[float] = None
    typical_p: Optional[float] = None
    repeat_last_n: Optional[int] = None
    temperature: Optional[float] = None
    repeat_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    mirostat: Optional[int] = None
    mirostat_tau: Optional[float] = None
    mirostat_eta: Optional[float] = None
    penalize_newline: Optional[bool] = None
    stop: Optional[List[str]] = None
    runner: Optional[Runner] = None

    @model_serializer(mode="wrap")
    def flatten_runner(self, handler):
        data = handler(self)
        runner = data.pop("runner", None)
        if runner:
            data.update(runner)
        return data


class CompletionRequest(BaseModel):
    """Request body for /api/generate."""
    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    format: Optional[str] = None
    options: Optional[Options] = None
    system: Optional[str] = None
    template: Optional[str] = None
    context: Optional[List[int]] = None
    stream: Optional[bool] = None
    raw: Optional[bool] = None

    @classmethod
    def of(cls, model: str, prompt: str, stream: bool,
           enable_json_format: bool = False) -> "CompletionRequest":
        """Build a plain request, optionally asking for JSON output."""
        return cls(
            model=model,
            prompt=prompt,
            format="json" if enable_json_format else None,
            stream=stream,
        )


class GenerateResponse(BaseModel):
    """A generate result, or one chunk of a streamed result.

    Durations are in nanoseconds. ``context`` and the timing fields are
    usually only present on the final chunk.
    """
    model_config = ConfigDict(frozen=True)

    model: str
    created_at: Optional[datetime] = None
    response: Optional[str] = None
    done: Optional[bool] = None
    context: Optional[List[int]] = None
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None
