"""
SweetCLI help rendering.

OptionPrinter turns schemas and registry descriptors into rich Text blocks:

- render(schema): one entry per visible option (the help flag is left out):

      -n, --number * [= 1]
          How many pizzas?

  "*" marks required options and "[= …]" shows the default. The description is
  indented by eight spaces and wrapped at the printer width. A schema without
  visible options renders "No options.".
- render_command(descriptor, title): the help page of one subcommand.
- render_application(title, descriptors, schema, aliases): the full help page
  (subcommands, global options, aliases and the legend).

Styles can be overridden via a __styles__ mapping in __main__.
"""
import textwrap
from collections import defaultdict

from rich.text import Text

from .utils import *


def _styles():
    return defaultdict(str, {
        "title": "cyan",
        "command": "green underline",
        "required": "bold",
        "default": "dim",
        "description": "dim",
        "empty": "dim",
        "alias": "bold",
        "legend-mark": "bold",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _display(value):
    if isinstance(value, list | tuple):
        return ", ".join(map(str, value))
    return str(value)


class OptionPrinter:
    """Renders option schemas and help pages as rich Text."""

    def __init__(self, width=78):
        if not isinstance(width, int) or width < 20:
            raise ValueError("option-printer 'width' must be an integer of at least 20")
        self.width = width

    def render_option(self, spec, /):
        """Rendered entry of one option, or None for the help flag."""
        if spec.id == "help":
            return None

        styles = _styles()
        definition = spec.label + (" *" if spec.required else "")

        text = Text("    ")
        text.append(definition, styles["required"] if spec.required else "")
        if spec.has_default:
            text.append(" ").append(f"[= {_display(spec.default)}]", styles["default"])
        text.append("\n")

        description = str(spec.descr) if spec.descr is not None else "no description provided"
        text.append("\n".join(
            textwrap.fill(
                paragraph,
                self.width,
                initial_indent=" " * 8,
                subsequent_indent=" " * 8,
            ) or " " * 8
            for paragraph in description.split("\n")
        ), styles["description"])
        text.append("\n")
        return text

    def render(self, schema, /, indent=0):
        """Rendered option list of a schema; "No options." when nothing is visible."""
        styles = _styles()
        entries = [self.render_option(spec) for spec in schema.visible()]

        text = Text()
        if entries:
            for entry in entries:
                text.append_text(entry).append("\n")
        else:
            text.append("No options.", styles["empty"]).append("\n")

        if indent:
            lines = text.split("\n", allow_blank=True)
            text = Text("\n").join(Text(" " * indent) + line if line.plain else line for line in lines)
        return text

    def render_command(self, descriptor, title, /, short_title=Unset):
        """Help page of a single subcommand."""
        styles = _styles()
        text = Text()

        if descriptor.name:
            text.append(f"{coalesce(short_title, title)}: ", styles["title"])
            text.append(descriptor.name, styles["command"]).append("\n")
        else:
            text.append(title, styles["title"]).append("\n")

        if descriptor.description:
            text.append(textwrap.fill(descriptor.description, self.width)).append("\n")
            if descriptor.schema.visible():
                text.append("\n")

        return text.append_text(self.render(descriptor.schema))

    def render_application(self, title, descriptors, schema, /, aliases=Unset):
        """
        Full application help page.

        Parameters
        - title: application title.
        - descriptors: subcommand descriptors to list (hidden ones are skipped).
        - schema: global option schema.
        - aliases: optional {alias: target} mapping.
        """
        styles = _styles()
        text = Text()
        text.append(title, styles["title"]).append("\n")
        text.append("Available subcommands:\n\n")

        listed = [descriptor for descriptor in descriptors if not descriptor.hidden]
        for descriptor in listed:
            text.append("    ").append(descriptor.name, styles["command"]).append("\n")
            if descriptor.description:
                text.append(textwrap.fill(
                    descriptor.description,
                    self.width,
                    initial_indent=" " * 4,
                    subsequent_indent=" " * 4,
                )).append("\n")
                if descriptor.schema.visible():
                    text.append("\n")
            text.append_text(self.render(descriptor.schema, indent=4)).append("\n")
        if not listed:
            text.append("    No commands available.", styles["empty"]).append("\n")

        text.append("Available global options:\n\n")
        text.append_text(self.render(schema))

        if aliases := dict(coalesce(aliases, {})):
            text.append("Available aliases:\n")
            longest = max(map(len, aliases))
            for alias, target in aliases.items():
                text.append("    ").append(alias, styles["alias"])
                text.append(" " * (longest - len(alias)) + " → " + target + "\n")
            text.append("\n")

        text.append("Legend:\n")
        text.append("    ").append("*", styles["legend-mark"]).append("     → required\n")
        text.append("    ").append("[= …]", styles["default"]).append(" → default value")
        return text


__all__ = (
    "OptionPrinter",
)
