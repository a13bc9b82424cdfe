"""Dependency injection container for the evaluation engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import NativeRecordAdapter, StorageRecordAdapter
from .core import (
    DirectPassModel,
    EvaluationOrchestrator,
    FinalExamModel,
    FinalResultResolver,
    RecoveryPolicyEngine,
    ReplaceLowestModel,
    ScoreCapModel,
)
from .core.recovery.final_exam import FinalExamConfig
from .core.recovery.replace_lowest import ReplaceLowestConfig
from .core.recovery.score_cap import ScoreCapConfig
from .pipeline import AdapterRegistry, EvaluationPipeline


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    storage_adapter = providers.Singleton(
        StorageRecordAdapter,
        default_rules=config.default_rules.optional(),
    )
    native_adapter = providers.Singleton(NativeRecordAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(storage_adapter, native_adapter),
    )

    score_cap = providers.Singleton(ScoreCapModel)
    replace_lowest = providers.Singleton(ReplaceLowestModel)
    direct_pass = providers.Singleton(DirectPassModel)
    final_exam = providers.Singleton(FinalExamModel)

    recovery_models = providers.List(
        score_cap,
        replace_lowest,
        direct_pass,
        final_exam,
    )

    recovery_engine = providers.Singleton(RecoveryPolicyEngine, models=recovery_models)
    resolver = providers.Singleton(FinalResultResolver)

    orchestrator = providers.Singleton(
        EvaluationOrchestrator,
        recovery_engine=recovery_engine,
        resolver=resolver,
    )

    pipeline = providers.Factory(
        EvaluationPipeline,
        orchestrator=orchestrator,
        registry=adapter_registry,
    )


def create_container(*, settings: dict | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()

    if not settings:
        return container

    engine_settings = settings.get("engine", {}) if isinstance(settings, dict) else {}
    if engine_settings:
        container.config.override(engine_settings)

    model_settings = settings.get("models", {}) if isinstance(settings, dict) else {}

    if "score_cap" in model_settings:
        cap_config = ScoreCapConfig(**model_settings["score_cap"])
        container.score_cap.override(providers.Singleton(ScoreCapModel, config=cap_config))

    if "replace_lowest" in model_settings:
        replace_config = ReplaceLowestConfig(**model_settings["replace_lowest"])
        container.replace_lowest.override(
            providers.Singleton(ReplaceLowestModel, config=replace_config)
        )

    if "final_exam" in model_settings:
        final_config = FinalExamConfig(**model_settings["final_exam"])
        container.final_exam.override(providers.Singleton(FinalExamModel, config=final_config))

    return container
