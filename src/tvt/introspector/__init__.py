"""Media introspection via ffprobe."""

from tvt.introspector.ffprobe import FFprobeIntrospector
from tvt.introspector.interface import MediaProbe
from tvt.introspector.parsers import parse_ffprobe_output

__all__ = ["FFprobeIntrospector", "MediaProbe", "parse_ffprobe_output"]
