"""Pydantic request/response schemas for JSON batch curve builds."""

from __future__ import annotations

from pydantic import BaseModel, Field

from slidercurve.geometry.curve import SliderCurve
from slidercurve.geometry.models import AnchorPoint


class SliderRequest(BaseModel):
    x: float
    y: float
    curve: str
    repeat_count: int = Field(default=1, ge=1)
    length: float

    @property
    def start(self) -> AnchorPoint:
        return AnchorPoint(self.x, self.y)


class SliderBatchRequest(BaseModel):
    sliders: list[SliderRequest]


class BoundingBoxModel(BaseModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float


class CurveResponse(BaseModel):
    points: list[tuple[float, float]]
    length: float
    end_point: tuple[float, float]
    bounding_box: BoundingBoxModel

    @classmethod
    def from_curve(cls, curve: SliderCurve) -> CurveResponse:
        end = curve.end_point()
        return cls(
            points=[(p.x, p.y) for p in curve.equal_distance_points],
            length=curve.length(),
            end_point=(end.x, end.y),
            bounding_box=BoundingBoxModel(**curve.bounding_box().to_dict()),
        )


class BatchResponse(BaseModel):
    curves: dict[int, CurveResponse]
    failures: dict[int, str]
