from .factory import log_sink_from_config, output_sink_from_config
from .output_sink import FileOutputSink, StdoutOutputSink

# Public adapter exports are optional but make wiring simpler.
__all__ = [
    "FileOutputSink",
    "StdoutOutputSink",
    "log_sink_from_config",
    "output_sink_from_config",
]
