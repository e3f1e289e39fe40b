from .context import PipelineTemplateContext, build_pipeline_context
from .local import (
    DebugPlaceholderMapping,
    LocalPipelineTemplateContext,
    build_local_pipeline_context,
)
from .placeholders import (
    PIPELINE_PLACEHOLDERS,
    placeholder_to_output_name,
    resolve_placeholder,
    resolve_placeholders,
)
from .renderer import (
    TemplateRenderer,
    select_template,
    select_local_template,
    JS_TS_APP_YML,
    CSHARP_APP_YML,
    SPFX_APP_YML,
    JS_TS_APP_LOCAL_YML,
    CSHARP_APP_LOCAL_YML,
)

__all__ = [
    "PipelineTemplateContext",
    "build_pipeline_context",
    "DebugPlaceholderMapping",
    "LocalPipelineTemplateContext",
    "build_local_pipeline_context",
    "PIPELINE_PLACEHOLDERS",
    "placeholder_to_output_name",
    "resolve_placeholder",
    "resolve_placeholders",
    "TemplateRenderer",
    "select_template",
    "select_local_template",
    "JS_TS_APP_YML",
    "CSHARP_APP_YML",
    "SPFX_APP_YML",
    "JS_TS_APP_LOCAL_YML",
    "CSHARP_APP_LOCAL_YML",
]
