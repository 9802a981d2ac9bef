"""Main CLI application using Cyclopts."""

import cyclopts

from permitgen.cli.commands import browse, generate, show

app = cyclopts.App(
    name="permitgen",
    help="Residence permit card generator",
)

app.command(show.app, name="show")
app.command(generate.app, name="generate")
app.command(browse.app, name="browse")


def main() -> None:
    app()
