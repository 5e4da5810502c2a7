from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str
    files: bool
    web_search: bool


# Closed list, in display order. "files" = accepts attachments,
# "web_search" = can browse.
MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(id="openai/gpt-oss-120b", name="GPT OSS", files=False, web_search=True),
    ModelDescriptor(
        id="meta-llama/llama-4-scout-17b-16e-instruct",
        name="LLaMA 4",
        files=True,
        web_search=False,
    ),
    ModelDescriptor(id="deepseek-r1-distill-llama-70b", name="DeepSeek R1", files=False, web_search=False),
    ModelDescriptor(id="llama-3.3-70b-versatile", name="LLaMA 3.3", files=False, web_search=False),
)

DEFAULT_MODEL = MODELS[0]


def get_model(model_id: str) -> ModelDescriptor:
    for model in MODELS:
        if model.id == model_id:
            return model
    raise KeyError(f"Unknown model: {model_id!r}")
