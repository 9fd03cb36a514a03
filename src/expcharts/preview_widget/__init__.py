"""Live distribution preview widget."""

from expcharts.preview_widget.distribution_preview import (
    DistributionPreviewWidget,
    OnPreviewChange,
    PreviewInputs,
)

__all__ = [
    "DistributionPreviewWidget",
    "OnPreviewChange",
    "PreviewInputs",
]
