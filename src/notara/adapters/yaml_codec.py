import io
import re
from typing import Any

import yaml

from ..core.ports import FrontmatterCodec

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


class YamlFrontmatter(FrontmatterCodec):
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        try:
            fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        except yaml.YAMLError:
            # not frontmatter after all; leave the body as written
            return {}, text
        if not isinstance(fm, dict):
            return {}, text
        body = text[m.end() :]
        return (fm, body)
