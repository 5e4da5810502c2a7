from __future__ import annotations

import dataclasses

import pytest

from medisync.config import Config
from medisync.images import ImageAllowList, is_allowed_image
from medisync.model_catalog import MODELS, get_model


def test_model_descriptors_are_well_formed():
    assert len(MODELS) == 4
    for model in MODELS:
        assert isinstance(model.id, str) and model.id
        assert isinstance(model.name, str) and model.name
        assert isinstance(model.files, bool)
        assert isinstance(model.web_search, bool)


def test_model_descriptors_are_read_only():
    before = [dataclasses.astuple(m) for m in MODELS]
    with pytest.raises(dataclasses.FrozenInstanceError):
        MODELS[0].files = True
    assert [dataclasses.astuple(m) for m in MODELS] == before


def test_get_model():
    assert get_model("llama-3.3-70b-versatile").name == "LLaMA 3.3"
    with pytest.raises(KeyError):
        get_model("gpt-nothing")


def test_only_configured_images_are_allowed():
    cfg = Config()
    allow = ImageAllowList.from_config(cfg)

    for url in cfg.image_remote_patterns:
        assert allow.is_allowed(url)

    first = cfg.image_remote_patterns[0]
    assert not allow.is_allowed(first.replace("https://", "http://"))
    assert not allow.is_allowed(first.split("?")[0])
    assert not allow.is_allowed("https://images.unsplash.com/photo-000")
    assert not allow.is_allowed("https://evil.example.com/photo-1519494080410-f9aa8f52f1e7")
    assert not allow.is_allowed("")


def test_is_allowed_image_uses_default_config():
    assert is_allowed_image(Config().image_remote_patterns[1])
    assert not is_allowed_image("https://example.com/a.png")


def test_app_state_carries_allow_list(cfg):
    from api.state import AppState

    state = AppState(cfg)
    assert state.images.is_allowed(cfg.image_remote_patterns[0])
    assert not state.images.is_allowed("https://images.unsplash.com/")
