"""HTML fragments emitted by the renderer and their default CSS classes."""

DEFAULT_CLASSES: dict[str, str] = {
    "h1": "text-3xl font-bold mt-8 mb-4 text-emerald-600",
    "h2": "text-2xl font-bold mt-6 mb-3 text-emerald-500",
    "h3": "text-xl font-bold mt-4 mb-2 text-emerald-400",
    "img": "rounded-lg max-w-full my-4 border border-[#333]",
    "a": "text-emerald-400 hover:underline",
    "blockquote": "border-l-4 border-emerald-500 pl-4 py-1 my-4 text-gray-400 italic bg-[#1A1A1A] rounded-r",
    "hr": "border-[#333] my-6",
    "li": "ml-4 list-disc marker:text-emerald-500",
    "li_task": "flex items-center gap-2",
    "checkbox": "mr-2 accent-emerald-500 h-4 w-4 rounded border-gray-600 bg-[#222]",
    "task_open": "text-gray-300",
    "task_done": "text-gray-500 line-through",
    "ul": "my-4 space-y-1",
    "code_wrapper": "code-block-wrapper my-4",
    "code_header": "code-block-header flex items-center justify-between bg-[#0d0d0d] px-4 py-2 border-b border-[#333] rounded-t-lg",
    "code_lang": "code-block-lang text-xs text-gray-400 font-mono",
    "code_copy": "code-block-copy text-xs text-gray-400 hover:text-emerald-400 transition-colors flex items-center gap-1",
    "pre": "bg-[#1A1A1A] p-4 rounded-b-lg border border-[#333] border-t-0 overflow-x-auto",
    "code_block": "text-sm",
    "code_inline": "bg-[#222] px-1.5 py-0.5 rounded text-emerald-300 font-mono text-sm",
    "table_wrapper": "overflow-x-auto my-6 rounded-lg border border-[#333]",
    "table": "w-full text-sm border-collapse",
    "th": "px-4 py-2 border border-[#333] bg-[#1A1A1A] text-left font-semibold text-emerald-500",
    "td": "px-4 py-2 border border-[#333] text-gray-300",
    "wiki_link": "wiki-link text-emerald-400 hover:text-emerald-300 underline decoration-dotted",
    "wiki_missing": "wiki-link-missing text-gray-500 italic",
    "p": "mb-4",
}

HEADING = '<h{level} id="{id}" class="{cls}">{text}</h{level}>'
IMAGE = '<img src="{src}" alt="{alt}" class="{cls}" />'
LINK = '<a href="{href}" target="_blank" rel="noopener noreferrer" class="{cls}">{text}</a>'
BLOCKQUOTE = '<blockquote class="{cls}">{text}</blockquote>'
HR = '<hr class="{cls}" />'
BULLET = '<li class="{cls}">{text}</li>'
TASK = (
    '<li class="{li_cls}"><input type="checkbox"{checked} disabled class="{box_cls}"> '
    '<span class="{span_cls}">{text}</span></li>'
)
LIST = '<ul class="{cls}">{items}</ul>'
INLINE_CODE = '<code class="{cls}">{text}</code>'
CODE_BLOCK = (
    '<div class="{wrapper_cls}">\n'
    '<div class="{header_cls}">'
    '<span class="{lang_cls}">{language}</span>'
    '<button type="button" class="{copy_cls}" data-code="{payload}" '
    'onclick="navigator.clipboard.writeText(this.dataset.code)">Copy</button>'
    '</div>\n'
    '<pre class="{pre_cls}"><code class="hljs language-{language} {code_cls}">{code}</code></pre>\n'
    '</div>'
)
TABLE = (
    '<div class="{wrapper_cls}"><table class="{table_cls}">'
    '<thead><tr>{head}</tr></thead><tbody>{body}</tbody></table></div>'
)
TH = '<th class="{cls}">{text}</th>'
TD = '<td class="{cls}">{text}</td>'
WIKI_LINK = '<a href="#" class="{cls}" data-note-id="{id}">{title}</a>'
WIKI_MISSING = '<span class="{cls}">{title}</span>'
PARAGRAPH = '<p class="{cls}">{text}</p>'


def attr(value: str) -> str:
    """Quote-safe attribute value for text that has already been escaped."""
    return value.replace('"', "&quot;")


def copy_payload(code: str) -> str:
    """Attribute-safe copy of raw code; the browser hands back the exact text."""
    return (
        code.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
