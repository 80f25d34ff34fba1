"""
logfan usage demo.

Shows:
1. One registration fanning out to a terminal and a log file
2. Per-destination levels (terminal: WARN, file: INFO)
3. Custom level colors and padding
4. Standard-library loggers routed into the same destinations
5. The same setup loaded from YAML

Run:
    python examples/usage_demo.py
"""

import logging
from pathlib import Path

from logfan import (
    Color,
    CombinedLogger,
    ConfigBuilder,
    Dispatcher,
    FileLogger,
    Level,
    LevelFilter,
    Padding,
    SimpleLogger,
    TerminalMode,
    TerminalUnavailableError,
    TermLogger,
    core,
)
from logfan.markup import colorize
from logfan.settings import LoggingSettings
from logfan.stdlib import install_stdlib_bridge

LOG_PATH = Path("logs") / "usage_demo.log"


def terminal(level: LevelFilter, config):
    try:
        return TermLogger(level, config, mode=TerminalMode.MIXED)
    except TerminalUnavailableError:
        return SimpleLogger(level, config)


def main():
    print("=" * 60)
    print("  logfan usage demo")
    print("=" * 60)

    # ── 1-3. Combined terminal + file ─────────────────────────
    term_config = (ConfigBuilder()
                   .set_level_color(Level.ERROR, Color.named("magenta"))
                   .set_level_color(Level.TRACE, Color.named("green"))
                   .set_level_padding(Padding.right())
                   .set_markup(True)
                   .build())
    file_config = ConfigBuilder().set_time_format_rfc3339().set_markup(True).build()

    CombinedLogger.init([
        terminal(LevelFilter.WARN, term_config),
        FileLogger(LevelFilter.INFO, file_config, LOG_PATH),
    ])

    core.error("Magenta error, <bold>bold</> text")
    core.info("This only appears in the log file")
    core.debug("This level is currently not enabled for any logger")

    # ── 4. stdlib bridge ──────────────────────────────────────
    install_stdlib_bridge(level=logging.INFO)
    logging.getLogger("thirdparty.client").warning("retrying request (%d/%d)", 1, 3)

    core.flush()
    print(f"\n  File output ({LOG_PATH}):")
    for line in LOG_PATH.read_text(encoding="utf-8").splitlines():
        print(f"    {line}")

    # ── 5. YAML ───────────────────────────────────────────────
    Dispatcher.reset()
    settings = LoggingSettings.from_yaml_string("""
loggers:
  - type: term
    level: trace
    mode: stdout
    format:
      thread_level: "off"
      colors: {trace: green}
""")
    settings.install()
    for name in ("error", "warn", "info", "debug", "trace"):
        getattr(core, name)(f"{name} from YAML config")

    print(colorize("\n  <green>done</>"))


if __name__ == "__main__":
    main()
