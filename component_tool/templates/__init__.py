# component_tool/templates/__init__.py
"""Built-in component templates"""

from dataclasses import dataclass, field
from string import Template
from typing import Dict, List, Optional

from ..api.exceptions import TemplateNotFoundError


@dataclass(frozen=True)
class ComponentTemplate:
    """Source files and build steps of a new component

    File contents and build commands use `${placeholder}` substitution,
    see `render`.
    """

    name: str
    language: str
    description: str
    files: Dict[str, str] = field(default_factory=dict)
    build: List[str] = field(default_factory=list)
    clean: List[str] = field(default_factory=list)

    def render(self, text: str, values: Dict[str, str]) -> str:
        return Template(text).safe_substitute(values)

    def matches(self, filter_text: Optional[str]) -> bool:
        """Match by exact language or by a substring of name or description"""
        if not filter_text:
            return True
        filter_text = filter_text.lower()
        return (
            filter_text == self.language
            or filter_text in self.name
            or filter_text in self.description.lower()
        )


_WIT = """\
package ${package};

world ${name} {
  export hello: func() -> string;
}
"""

TEMPLATES: Dict[str, ComponentTemplate] = {
    "rust": ComponentTemplate(
        name="rust",
        language="rust",
        description="Rust component built with cargo-component",
        files={
            "Cargo.toml": """\
[package]
name = "${crate}"
version = "0.1.0"
edition = "2021"

[lib]
crate-type = ["cdylib"]

[dependencies]
wit-bindgen-rt = "0.37"

[package.metadata.component]
package = "${package}"
""",
            "src/lib.rs": """\
#[allow(warnings)]
mod bindings;

struct Component;

impl bindings::Guest for Component {
    fn hello() -> String {
        "Hello from ${package}".to_string()
    }
}

bindings::export!(Component with_types_in bindings);
""",
            "wit/component.wit": _WIT,
        },
        build=[
            "cargo component build --release",
            "cp target/wasm32-wasip1/release/${crate}.wasm ${linked_wasm}",
        ],
        clean=["target"],
    ),
    "python": ComponentTemplate(
        name="python",
        language="python",
        description="Python component built with componentize-py",
        files={
            "main.py": """\
import wit_world


class WitWorld(wit_world.WitWorld):
    def hello(self) -> str:
        return "Hello from ${package}"
""",
            "wit/component.wit": _WIT,
        },
        build=[
            "componentize-py --wit-path wit --world ${name} componentize main -o ${linked_wasm}",
        ],
        clean=["wit_world"],
    ),
    "js": ComponentTemplate(
        name="js",
        language="javascript",
        description="JavaScript component built with jco",
        files={
            "src/main.js": """\
export function hello() {
  return "Hello from ${package}";
}
""",
            "wit/component.wit": _WIT,
        },
        build=[
            "jco componentize src/main.js --wit wit --world-name ${name} --out ${linked_wasm}",
        ],
    ),
}


def get_template(name: str) -> ComponentTemplate:
    """
    Get a built-in template

    Raises:
        TemplateNotFoundError: If there is no template with that name
    """
    template = TEMPLATES.get(name)
    if template is None:
        raise TemplateNotFoundError(name, sorted(TEMPLATES))
    return template


def list_templates(filter_text: Optional[str] = None) -> List[ComponentTemplate]:
    """List templates matching a language or name filter"""
    return [t for t in TEMPLATES.values() if t.matches(filter_text)]


__all__ = [
    'ComponentTemplate',
    'TEMPLATES',
    'get_template',
    'list_templates',
]
