"""ActiveBreak: движок умных напоминаний о разминке."""

__version__ = "0.3.0"
