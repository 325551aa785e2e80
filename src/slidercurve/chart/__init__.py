"""Chart-side ingestion of slider data.

Public API
----------
parse_curve_string  - packed ``type|x:y|...`` string → (hint, anchors)
parse_slider        - slider fields → SliderSpec
SliderLineParser    - raw hit-object line → SliderSpec
ChartFormatError    - raised on malformed slider fields
"""

from slidercurve.chart.parser import (
    ChartFormatError,
    SliderLineParser,
    parse_curve_string,
    parse_slider,
)

__all__ = [
    "ChartFormatError",
    "SliderLineParser",
    "parse_curve_string",
    "parse_slider",
]
