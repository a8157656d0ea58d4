"""kida environment binding.

Registers fluentform's filters and globals on an existing kida
Environment, or creates one for the given template directories.
"""

from pathlib import Path

from kida import ChoiceLoader, Environment, FileSystemLoader

from fluentform.engine import FluentEngine
from fluentform.templating.filters import BUILTIN_FILTERS


def install(env: Environment, engine: FluentEngine | None = None) -> Environment:
    """Register fluentform filters on *env* and return it.

    When *engine* is given it is exposed as the ``fluent`` global so
    templates can open forms themselves: ``{{ fluent.form(model_type) }}``.
    """
    env.update_filters(BUILTIN_FILTERS)
    if engine is not None:
        env.add_global("fluent", engine)
    return env


def create_environment(
    engine: FluentEngine,
    template_dirs: tuple[str | Path, ...] = ("templates",),
    *,
    autoescape: bool = True,
) -> Environment:
    """Create a kida Environment with fluentform installed.

    Supports several template directories (pages, partials, components)
    searched in order.
    """
    loader = ChoiceLoader([FileSystemLoader(str(d)) for d in template_dirs])
    env = Environment(loader=loader, autoescape=autoescape)
    return install(env, engine)
