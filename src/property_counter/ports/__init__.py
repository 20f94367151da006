from .log_sink import LogSink
from .output_sink import OutputSink

# Public port exports keep wiring explicit at composition time.
__all__ = ["LogSink", "OutputSink"]
