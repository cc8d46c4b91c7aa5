from .metrics import query
from .recorder import MetricsRecorder, OperationStats
from .dump import MetricsDump

__all__ = ("query", "MetricsRecorder", "OperationStats", "MetricsDump")
