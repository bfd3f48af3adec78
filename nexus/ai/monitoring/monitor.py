"""
AI Monitor - Unified logging and metrics tracking.

One call tracks everything:
- Structured JSON logs on the "nexus.ai" logger
- In-memory metrics aggregation
- Cost estimation

Usage:
    from nexus.ai.monitoring import ai_monitor

    ai_monitor.track_request(
        request_id="abc123",
        prompt="open facebook",
        provider="gemini",
        model="gemini-2.5-flash",
    )

    ai_monitor.track_response_from_ai_response("abc123", ai_response, stage="classification")

    stats = ai_monitor.get_stats()
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Any

from nexus.ai.providers.base import AIResponse


# ---------------------------------------------------------------------------
# LOGGING SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("nexus.ai")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _preview(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


# ---------------------------------------------------------------------------
# METRICS DATA CLASSES
# ---------------------------------------------------------------------------
@dataclass
class RequestMetrics:
    """Metrics for a single model call."""
    request_id: str
    provider: str
    model: str
    stage: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    latency_ms: float
    success: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    estimated_cost: float = 0.0


@dataclass
class AggregatedMetrics:
    """Aggregated metrics since process start (or the last reset)."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_tokens: int = 0
    total_prompt_tokens: int = 0
    total_completion_tokens: int = 0
    total_latency_ms: float = 0.0
    estimated_total_cost: float = 0.0
    requests_by_stage: Dict[str, int] = field(default_factory=dict)
    intents_by_kind: Dict[str, int] = field(default_factory=dict)

    @property
    def avg_latency_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_latency_ms / self.total_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": f"{self.success_rate:.1f}%",
            "total_tokens": self.total_tokens,
            "prompt_tokens": self.total_prompt_tokens,
            "completion_tokens": self.total_completion_tokens,
            "avg_latency_ms": round(self.avg_latency_ms, 2),
            "estimated_total_cost": f"${self.estimated_total_cost:.4f}",
            "requests_by_stage": dict(self.requests_by_stage),
            "intents_by_kind": dict(self.intents_by_kind),
        }


# ---------------------------------------------------------------------------
# UNIFIED AI MONITOR
# ---------------------------------------------------------------------------
class AIMonitor:
    """
    Unified AI monitoring: logging + metrics in one call.

    Cost Model (per 1M tokens):
    - Gemini Flash: ~$0.30 input, ~$2.50 output
    """

    COST_PER_1M_TOKENS = {
        "gemini": {"input": 0.30, "output": 2.50},
    }

    def __init__(self):
        self._logger = logger
        self._lock = Lock()
        self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # MAIN TRACKING METHODS
    # -----------------------------------------------------------------------

    def track_request(
        self,
        request_id: str,
        prompt: str,
        provider: str,
        model: str,
        has_image: bool = False,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Track the start of a user turn."""
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": _preview(prompt, 100),
            "has_image": has_image,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"AI Request: {json.dumps(log_data)}")

    def track_response(
        self,
        request_id: str,
        provider: str,
        model: str,
        content: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: float,
        stage: str = "classification",
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """
        Track a model response (logs + metrics in one call).

        Call this after every provider call, including failed ones.
        """
        total_tokens = prompt_tokens + completion_tokens
        cost = self._estimate_cost(provider, prompt_tokens, completion_tokens)

        metrics = RequestMetrics(
            request_id=request_id,
            provider=provider,
            model=model,
            stage=stage,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
            latency_ms=latency_ms,
            success=success,
            estimated_cost=cost,
        )

        with self._lock:
            self._update_aggregated(metrics)

        log_data = {
            "event": "ai_response",
            "request_id": request_id,
            "provider": provider,
            "model": model,
            "stage": stage,
            "success": success,
            "latency_ms": round(latency_ms, 2),
            "tokens": {
                "prompt": prompt_tokens,
                "completion": completion_tokens,
                "total": total_tokens,
            },
            "estimated_cost": f"${cost:.6f}",
            "response_length": len(content) if content else 0,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if error:
            log_data["error"] = error

        level = logging.INFO if success else logging.WARNING
        self._logger.log(level, f"AI Response: {json.dumps(log_data)}")

    def track_response_from_ai_response(
        self,
        request_id: str,
        response: AIResponse,
        stage: str = "classification",
    ) -> None:
        """Track response using an AIResponse object directly."""
        provider = response.provider.value if hasattr(response.provider, 'value') else str(response.provider)

        self.track_response(
            request_id=request_id,
            provider=provider,
            model=response.model,
            content=response.content,
            prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
            completion_tokens=response.usage.completion_tokens if response.usage else 0,
            latency_ms=response.latency_ms,
            stage=stage,
            success=response.success,
            error=response.error,
        )

    def track_intent(
        self,
        request_id: str,
        original_text: str,
        intent_kind: str,
        populated_branches: List[str],
        processing_time_ms: float = 0.0,
    ) -> None:
        """Track which branch a turn resolved through."""
        with self._lock:
            self._aggregated.intents_by_kind[intent_kind] = \
                self._aggregated.intents_by_kind.get(intent_kind, 0) + 1

        log_data = {
            "event": "intent_resolved",
            "request_id": request_id,
            "intent_kind": intent_kind,
            "populated_branches": populated_branches,
            "processing_time_ms": round(processing_time_ms, 2),
            "original_text": _preview(original_text, 50),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        self._logger.info(f"Intent Resolved: {json.dumps(log_data)}")

    def track_error(
        self,
        request_id: str,
        error: str,
        stage: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Track an error in the AI pipeline."""
        log_data = {
            "event": "ai_error",
            "request_id": request_id,
            "error": error,
            "stage": stage,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.error(f"AI Error: {json.dumps(log_data)}")

    # -----------------------------------------------------------------------
    # METRICS METHODS
    # -----------------------------------------------------------------------

    def get_stats(self) -> AggregatedMetrics:
        """Get current aggregated statistics."""
        with self._lock:
            return self._aggregated

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _estimate_cost(self, provider: str, prompt_tokens: int, completion_tokens: int) -> float:
        """Estimate cost in USD."""
        costs = self.COST_PER_1M_TOKENS.get(provider.lower(), {"input": 0, "output": 0})
        input_cost = (prompt_tokens / 1_000_000) * costs["input"]
        output_cost = (completion_tokens / 1_000_000) * costs["output"]
        return input_cost + output_cost

    def _update_aggregated(self, metrics: RequestMetrics) -> None:
        self._aggregated.total_requests += 1

        if metrics.success:
            self._aggregated.successful_requests += 1
        else:
            self._aggregated.failed_requests += 1

        self._aggregated.total_tokens += metrics.total_tokens
        self._aggregated.total_prompt_tokens += metrics.prompt_tokens
        self._aggregated.total_completion_tokens += metrics.completion_tokens
        self._aggregated.total_latency_ms += metrics.latency_ms
        self._aggregated.estimated_total_cost += metrics.estimated_cost

        stage = metrics.stage
        self._aggregated.requests_by_stage[stage] = \
            self._aggregated.requests_by_stage.get(stage, 0) + 1


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_monitor = AIMonitor()
