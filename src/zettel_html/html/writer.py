"""Fallible HTML writer shared by both tree encoders.

The writer owns one output buffer and a *sticky* error slot: the first error
recorded via :meth:`HtmlWriter.set_error` turns every later write into a
no-op, while the caller keeps walking the tree to completion.  Everything
that must be byte-identical between the symbolic and the JSON-tree encoder
(attributes, footnote markup, blobs, images, links, transclusions) lives
here.
"""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from zettel_html.attrs import DEFAULT_KEY, MARKER_KEY, Attributes
from zettel_html.errors import TypeMismatch
from zettel_html.html.escape import (
    attribute_escape,
    escape,
    escape_literal,
    escape_visible,
    is_safe,
)

SYNTAX_SVG = "svg"

# Reference states (shared spelling; the JSON tree uses them verbatim, the
# symbolic tree uses the upper-cased symbol / the LINK-* suffix).
REF_STATE_ZETTEL = "zettel"
REF_STATE_SELF = "self"
REF_STATE_FOUND = "found"
REF_STATE_BROKEN = "broken"
REF_STATE_HOSTED = "hosted"
REF_STATE_LOCAL = "local"  # JSON-tree spelling of "hosted"
REF_STATE_BASED = "based"
REF_STATE_EXTERNAL = "external"
REF_STATE_INVALID = "invalid"

_HREF_STATES = frozenset(
    {
        REF_STATE_ZETTEL,
        REF_STATE_SELF,
        REF_STATE_FOUND,
        REF_STATE_HOSTED,
        REF_STATE_LOCAL,
        REF_STATE_BASED,
    }
)

ALIGN_CLASSES = {"": "", "left": "left", "center": "center", "right": "right"}


@dataclass(frozen=True, slots=True)
class Footnote:
    """A captured footnote: its (representation-specific) body and attributes."""

    note: Any
    attrs: Attributes


class FootnoteQueue:
    """FIFO of pending footnotes, shared by a render session and its sub-renders."""

    def __init__(self) -> None:
        self._pending: deque[Footnote] = deque()
        self._enqueued = 0
        self._emitted = 0

    def push(self, note: Any, attrs: Attributes) -> int:
        """Enqueue a footnote and return its document-unique 1-based number."""
        self._pending.append(Footnote(note, attrs))
        self._enqueued += 1
        return self._enqueued

    def pop(self) -> tuple[int, Footnote]:
        fn = self._pending.popleft()
        self._emitted += 1
        return self._emitted, fn

    def __len__(self) -> int:
        return len(self._pending)


class HtmlWriter:
    """Output sink, render modes and sticky error of one render session."""

    def __init__(self, heading_offset: int = 0, *, footnotes: FootnoteQueue | None = None) -> None:
        self._out: list[str] = []
        self._err: Exception | None = None
        self.heading_offset = heading_offset
        self.unique = ""
        self.footnotes = footnotes if footnotes is not None else FootnoteQueue()
        self.write_footnotes = True  # emit footnote references and queue the notes
        self.no_links = False  # output is itself placed inside a link
        self.visible_space = False  # literal content shows spaces as U+2423

    # ── session state ───────────────────────────────────────────────

    def set_error(self, err: Exception | None) -> None:
        """Record *err* unless an earlier error is already recorded."""
        if self._err is None and err is not None:
            self._err = err

    @property
    def error(self) -> Exception | None:
        """The first error encountered during this session."""
        return self._err

    def set_unique(self, prefix: str) -> None:
        """Set the string that makes footnote, heading and mark ids unique."""
        self.unique = ":" + prefix if prefix else ""

    def ignore_links(self) -> bool:
        return self.no_links

    def getvalue(self) -> str:
        return "".join(self._out)

    @contextmanager
    def visible_space_mode(self, enabled: bool) -> Iterator[None]:
        """Switch visible-space escaping on for a subtree, restoring afterwards."""
        saved = self.visible_space
        if enabled:
            self.visible_space = True
        try:
            yield
        finally:
            self.visible_space = saved

    # ── primitive writes (no-ops after an error) ────────────────────

    def write_string(self, s: str) -> None:
        if self._err is None:
            self._out.append(s)

    def write_strings(self, *parts: str) -> None:
        if self._err is None:
            self._out.extend(parts)

    def write_escaped(self, s: str) -> None:
        self.write_string(escape(s))

    def write_escaped_literal(self, s: str) -> None:
        if self.visible_space:
            self.write_string(escape_visible(s))
        else:
            self.write_string(escape_literal(s))

    def write_attributes(self, a: Attributes | None) -> None:
        if not a:
            return
        for key in a.keys_sorted():
            if key in (DEFAULT_KEY, MARKER_KEY):
                continue
            self.write_strings(" ", key, '="', attribute_escape(a[key]), '"')

    def write_start_tag(self, tag: str, a: Attributes | None = None) -> None:
        self.write_strings("<", tag)
        self.write_attributes(a)
        self.write_string(">")

    def write_end_tag(self, tag: str) -> None:
        self.write_strings("</", tag, ">")

    def write_raw_html(self, s: str) -> None:
        """Write *s* verbatim if it passes the safety filter, else drop it."""
        if s and is_safe(s):
            self.write_string(s)

    # ── node-level helpers shared by both encoders ──────────────────

    def heading_level(self, level: str | int) -> str | None:
        try:
            n = int(level)
        except (TypeError, ValueError):
            self.set_error(TypeMismatch("heading level", level))
            return None
        return str(n + self.heading_offset)

    def heading_attributes(self, a: Attributes, slug: str, fragment: str) -> Attributes:
        if "id" in a:
            return a
        frag = fragment or slug
        if not frag:
            return a
        return a.set("id", self.unique + frag)

    def write_table_cell_start(self, align: str) -> None:
        cls = ALIGN_CLASSES.get(align, "")
        if cls:
            self.write_strings('<td class="', cls, '">')
        else:
            self.write_string("<td>")

    def write_comment(self, s: str, *, block: bool) -> None:
        if not s:
            return
        if block:
            self.write_string("<!--\n")
            self.write_escaped(s)
            self.write_string("\n-->")
        else:
            self.write_string("<!-- ")
            self.write_escaped(s)
            self.write_string(" -->")

    def write_verbatim(self, a: Attributes, content: str) -> None:
        with self.visible_space_mode(a.has_marker()):
            self.write_string("<pre>")
            self.write_start_tag("code", a.remove_marker())
            self.write_escaped_literal(content)
            self.write_string("</code></pre>")

    def write_literal(self, tag: str, a: Attributes, content: str) -> None:
        """Write inline literal content; the ``"-"`` marker makes spaces visible."""
        if not content:
            return
        with self.visible_space_mode(a.has_marker()):
            self.write_start_tag(tag, a.remove_marker())
            self.write_escaped_literal(content)
            self.write_end_tag(tag)

    def write_blob(self, title: str, syntax: str, data: str) -> None:
        if not data or not syntax:
            return
        if syntax == SYNTAX_SVG:
            if is_safe(data):
                self.write_strings("<p>", data, "</p>")
            return
        self.write_strings('<p><img src="data:image/', syntax, ";base64,", data, '"')
        if title:
            self.write_strings(' title="', attribute_escape(title), '"')
        self.write_string("></p>")

    def write_svg_embed(self, src: str) -> None:
        self.write_strings(
            '<figure><embed type="image/svg+xml" src="/',
            attribute_escape(src),
            '.svg" /></figure>',
        )

    def write_image(self, a: Attributes, src: str, title: str) -> None:
        a = a.set("src", src)
        if title:
            a = a.set("title", title)
        self.write_start_tag("img", a)

    def write_transclude(self, state: str, ref: str) -> bool:
        """Write a transclusion; return False if there was nothing to write."""
        if not ref:
            return False
        if state.lower() == REF_STATE_EXTERNAL:
            self.write_string("<p><img")
            self.write_attributes(Attributes({"src": ref}).add_class("external"))
            self.write_string("></p>")
            return True
        if state.lower() == REF_STATE_LOCAL:
            state = REF_STATE_HOSTED
        self.write_strings("<!-- transclude ", state.upper(), ": ")
        self.write_escaped(ref)
        self.write_string(" -->")
        return True

    @staticmethod
    def link_attributes(state: str, a: Attributes, ref: str) -> Attributes | None:
        """Attributes of an ``<a>`` element, or None if it renders as a span."""
        state = state.lower()
        if state == REF_STATE_EXTERNAL:
            return a.set("href", ref).add_class("external")
        if state == REF_STATE_BROKEN:
            return a.add_class("broken")
        if state in _HREF_STATES:
            return a.set("href", ref)
        return None

    def write_mark_start(self, fragment: str) -> None:
        self.write_strings('<a id="', self.unique, attribute_escape(fragment), '">')

    def push_footnote(self, note: Any, a: Attributes) -> None:
        """Queue a footnote and write its numbered reference."""
        n = str(self.footnotes.push(note, a))
        un = self.unique + n
        self.write_strings(
            '<sup id="fnref:', un, '"><a class="zs-noteref" href="#fn:', un,
            '" role="doc-noteref">', n, "</a></sup>",
        )

    def render_footnote(self, note: Any) -> None:
        """Render the captured body of a footnote (representation specific)."""
        raise NotImplementedError

    def write_endnotes(self) -> None:
        """Flush the footnote queue as an ordered list of endnotes.

        Rendering a note may queue further (nested) notes; they are flushed
        in the same pass.
        """
        if not self.footnotes:
            return
        self.write_string('<ol class="zs-endnotes">')
        while len(self.footnotes) > 0:
            num, fn = self.footnotes.pop()
            n = str(num)
            un = self.unique + n
            a = fn.attrs.add_class("zs-endnote").set("value", n)
            if "id" not in a:
                a = a.set("id", "fn:" + un)
            if "role" not in a:
                a = a.set("role", "doc-endnote")
            self.write_start_tag("li", a)
            self.render_footnote(fn.note)
            self.write_strings(
                ' <a class="zs-endnote-backref" href="#fnref:', un,
                '" role="doc-backlink">&#x21a9;&#xfe0e;</a></li>',
            )
        self.write_string("</ol>")
