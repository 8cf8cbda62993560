from pydantic import BaseModel, Field


class MetricResult(BaseModel):
    latency_ms: float = 0.0
    tokens_per_second: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0


class LLMResponse(BaseModel):
    provider: str
    model: str
    response: str = ""
    metrics: MetricResult = Field(default_factory=MetricResult)
