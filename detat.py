import sys
import click
from transcoding import __version__
from transcoding.config import apply_config
from transcoding.encoder import DECODER_TRAPS, is_known_encoding
from transcoding.formatter import (
    build_statistics,
    render_statistics,
    report_detection,
    report_error,
    write_json_line,
    write_plain,
)
from transcoding.models import Settings
from transcoding.runner import Detat


def validate_fallback(ctx, param, value):
    """Reject unknown fallback encodings before any file is read."""
    if value is not None and not is_known_encoding(value):
        raise click.BadParameter(f"unknown encoding: {value}")
    return value


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("paths", nargs=-1, metavar="[PATH]...")
@click.option(
    "-b",
    "--allow-binary",
    is_flag=True,
    help="Print a binary input as it is.",
)
@click.option(
    "-j",
    "--json",
    "json_output",
    is_flag=True,
    help="Show results in a JSON Lines format.",
)
@click.option(
    "-s",
    "--stat",
    "show_stats",
    is_flag=True,
    help="Show statistics instead of the decoded text.",
)
@click.option(
    "-c",
    "--confidence-min",
    type=float,
    default=0.0,
    show_default=True,
    metavar="CONFIDENCE_MIN",
    help="Fail if detected confidence is less than this.",
)
@click.option(
    "-f",
    "--fallback",
    "fallback_encoding",
    default=None,
    metavar="ENCODING",
    callback=validate_fallback,
    help="Use this encoding if detected confidence is less than CONFIDENCE_MIN.",
)
@click.option(
    "-t",
    "--decoder-trap",
    type=click.Choice(DECODER_TRAPS, case_sensitive=False),
    default="strict",
    show_default=True,
    help="How to handle bytes that are invalid for the chosen encoding.",
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Print detection results to stderr."
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    envvar="DETAT_CONFIG",
    is_eager=True,
    expose_value=False,
    callback=apply_config,
    help="YAML file with default option values.",
)
@click.version_option(__version__, "-V", "--version", prog_name="detat")
@click.pass_context
def main(
    ctx,
    paths,
    allow_binary,
    json_output,
    show_stats,
    confidence_min,
    fallback_encoding,
    decoder_trap,
    verbose,
):
    """
    cat with chardet: detect the encoding of each PATH (or standard
    input) and print it as UTF-8.
    """
    settings = Settings(
        allow_binary=allow_binary,
        json_output=json_output,
        show_stats=show_stats,
        confidence_min=confidence_min,
        fallback_encoding=fallback_encoding,
        decoder_trap=decoder_trap.lower(),
        verbose=verbose,
        paths=tuple(paths),
    )

    out = sys.stdout.buffer
    detat = Detat(settings, stdin=sys.stdin.buffer)

    outcomes = []
    failed = False

    for outcome in detat.run():
        failed = failed or outcome.failed

        if settings.verbose:
            report_detection(outcome)

        if settings.show_stats:
            # Decoded text is never printed in stats mode
            outcome.text = outcome.raw = None
            outcomes.append(outcome)
            if outcome.failed and not settings.json_output:
                report_error(outcome)
        elif settings.json_output:
            write_json_line(outcome, out)
        else:
            write_plain(outcome, out)

        out.flush()

    if settings.show_stats:
        summary = render_statistics(build_statistics(outcomes), settings.json_output)
        out.write(summary.encode("utf-8"))
        out.flush()

    ctx.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
