"""Modelfile text builder."""

from typing import Any, Dict, Optional

from ..core.errors import PreconditionError


def _require_text(value: Optional[str], name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PreconditionError(f"{name} can not be None or empty.")
    return value


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ModelFileBuilder:
    """Builds the text of a Modelfile.

    Example:
        modelfile = (ModelFileBuilder.from_model("llama2")
                     .with_parameter("temperature", 1)
                     .with_system("You are Mario from Super Mario Bros.")
                     .build())
    """

    def __init__(self, base_model: str):
        self.base_model = _require_text(base_model, "from")
        self.parameters: Dict[str, Any] = {}
        self.system: Optional[str] = None
        self.template: Optional[str] = None
        self.adapter: Optional[str] = None
        self.license: Optional[str] = None

    @classmethod
    def from_model(cls, base_model: str) -> "ModelFileBuilder":
        return cls(base_model)

    def with_parameter(self, name: str, value: Any) -> "ModelFileBuilder":
        """Set a PARAMETER line. A list value emits one line per item."""
        _require_text(name, "parameter")
        self.parameters[name] = value
        return self

    def with_system(self, system: str) -> "ModelFileBuilder":
        self.system = _require_text(system, "system")
        return self

    def with_template(self, template: str) -> "ModelFileBuilder":
        self.template = _require_text(template, "template")
        return self

    def with_adapter(self, adapter: str) -> "ModelFileBuilder":
        self.adapter = _require_text(adapter, "adapter")
        return self

    def with_license(self, license: str) -> "ModelFileBuilder":
        self.license = _require_text(license, "license")
        return self

    def build(self) -> str:
        lines = [f"FROM {self.base_model}"]
        for name, value in self.parameters.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            for item in values:
                lines.append(f"PARAMETER {name} {_format_value(item)}")
        if self.system:
            lines.append(f"SYSTEM {self.system}")
        if self.template:
            lines.append(f"TEMPLATE {self.template}")
        if self.adapter:
            lines.append(f"ADAPTER {self.adapter}")
        if self.license:
            lines.append(f"LICENSE {self.license}")
        return "\n".join(lines)
