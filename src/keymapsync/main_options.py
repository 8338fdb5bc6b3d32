"""Click option helpers for the watch/once/check run modes."""
import click

# Run modes in the order they are reported; the first is the default.
RUN_MODES: tuple[str, ...] = ("watch", "once", "check")

_MODE_META_KEY = "keymapsync.run_mode"


class RunModeOption(click.Option):
    """Flag that selects a run mode; at most one mode flag may be given.

    The chosen mode is remembered in the click context so a second mode
    flag is rejected with a usage error naming both flags. The flag value
    itself is not passed to the command; use selected_mode() instead.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("is_flag", True)
        kwargs.setdefault("expose_value", False)
        super().__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        if self.name in opts:
            chosen = ctx.meta.get(_MODE_META_KEY)
            if chosen is None:
                ctx.meta[_MODE_META_KEY] = self.name
            elif chosen != self.name:
                raise click.UsageError(f"Options --{chosen} and --{self.name} are mutually exclusive", ctx=ctx)
        return super().handle_parse_result(ctx, opts, args)


def selected_mode(ctx: click.Context) -> str:
    """Return the run mode chosen on the command line, defaulting to watch."""
    return ctx.meta.get(_MODE_META_KEY, RUN_MODES[0])
