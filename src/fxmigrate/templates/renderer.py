from dataclasses import asdict
from pathlib import Path
from typing import Optional, Union

import yaml
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from fxmigrate.common.exceptions import TemplateRenderError, UnsupportedTargetError
from .context import PipelineTemplateContext
from .local import LocalPipelineTemplateContext

TEMPLATES_DIR = Path(__file__).parent / "assets" / "v3migration"
TEMPLATE_SUFFIX = ".j2"

JS_TS_APP_YML = "js.ts.app.yml"
CSHARP_APP_YML = "csharp.app.yml"
SPFX_APP_YML = "spfx.app.yml"
JS_TS_APP_LOCAL_YML = "js.ts.app.local.yml"
CSHARP_APP_LOCAL_YML = "csharp.app.local.yml"

TemplateContext = Union[PipelineTemplateContext, LocalPipelineTemplateContext]


def select_template(host_type: Optional[str], language: Optional[str]) -> str:
    host = (host_type or "").lower()
    lang = (language or "").lower()
    if host == "azure":
        if lang in ("javascript", "typescript"):
            return JS_TS_APP_YML
        if lang == "csharp":
            return CSHARP_APP_YML
    elif host == "spfx":
        return SPFX_APP_YML
    raise UnsupportedTargetError(host_type, language)


def select_local_template(
    host_type: Optional[str], language: Optional[str]
) -> Optional[str]:
    # SPFx projects debug through the workbench and get no local pipeline.
    if (host_type or "").lower() != "azure":
        return None
    lang = (language or "").lower()
    if lang in ("javascript", "typescript"):
        return JS_TS_APP_LOCAL_YML
    if lang == "csharp":
        return CSHARP_APP_LOCAL_YML
    return None


class TemplateRenderer:
    def __init__(self, templates_dir: Optional[Path] = None):
        # "${{NAME}}" is the target platform's own variable syntax and appears
        # verbatim in templates, so Jinja variables use [[ ]] instead.
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            undefined=StrictUndefined,
            variable_start_string="[[",
            variable_end_string="]]",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def render(self, template_id: str, context: TemplateContext) -> str:
        try:
            template = self.env.get_template(template_id + TEMPLATE_SUFFIX)
        except TemplateNotFound as e:
            raise TemplateRenderError(f"Unknown template '{template_id}'.") from e

        try:
            text = template.render(**asdict(context))
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render template '{template_id}': {e}"
            ) from e

        try:
            yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise TemplateRenderError(
                f"Template '{template_id}' produced malformed YAML: {e}"
            ) from e
        return text
