import logging
from typing import Optional


class TopicFormatter(logging.Formatter):
    """Aligned ``LEVEL:topic   : message`` lines, optionally coloured."""

    COLORS = {
        logging.DEBUG: "\033[38;5;252m",
        logging.INFO: "\033[38;5;111m",
        logging.WARNING: "\033[38;5;229m",
        logging.ERROR: "\033[38;5;210m",
        logging.CRITICAL: "\033[38;5;217m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        topic = record.name.split(".")[-1][:8]
        level = record.levelname[:5]
        if self.use_color:
            level = f"{self.COLORS.get(record.levelno, '')}{level:<5}{self.RESET}"
        else:
            level = f"{level:<5}"
        prefix = f"{level}:{topic:<8}: "
        s = super().format(record)
        return "\n".join(prefix + line for line in s.split("\n"))


def setup_logging(level: str = "INFO", color: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``cavewalk`` logger for the command line tools."""
    root = logging.getLogger("cavewalk")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler()
    console.setFormatter(TopicFormatter(use_color=color))
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(fh)

    root.propagate = False
    return root
