# gemview/document/view.py
import html

from PySide6.QtCore import QUrl, Signal
from PySide6.QtWidgets import QTextBrowser, QVBoxLayout, QWidget

from ..status import is_failure
from .document import Document


def to_html(doc: Document) -> str:
    if is_failure(doc.status):
        err = doc.error
        icon = chr(err.icon) if err.icon else ""
        return (
            f"<h1>{icon} {html.escape(err.title)}</h1>"
            f"<p>{html.escape(err.info)}</p>"
            f"<p><code>{html.escape(doc.meta)}</code></p>"
        )
    if doc.meta != "text/gemini":
        return f"<pre>{html.escape(doc.body)}</pre>"
    links = iter(doc.links())
    out = []
    preformatted = False
    for line in doc.body.split("\n"):
        if line.startswith("```"):
            out.append("</pre>" if preformatted else "<pre>")
            preformatted = not preformatted
        elif preformatted:
            out.append(html.escape(line))
        elif line.startswith("=>"):
            link = next(links, None)
            if link:
                url, label = link
                out.append(f'<p><a href="{html.escape(url, quote=True)}">{html.escape(label)}</a></p>')
        elif line.startswith("#"):
            level = min(len(line) - len(line.lstrip("#")), 3)
            out.append(f"<h{level}>{html.escape(line[level:].strip())}</h{level}>")
        elif line.startswith("* "):
            out.append(f"<p>&bull; {html.escape(line[2:])}</p>")
        elif line.startswith(">"):
            out.append(f"<blockquote>{html.escape(line[1:].strip())}</blockquote>")
        else:
            out.append(f"<p>{html.escape(line)}</p>")
    if preformatted:
        out.append("</pre>")
    return "\n".join(out)


class DocumentView(QWidget):
    link_activated = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._view = QTextBrowser()
        self._view.setOpenLinks(False)
        self._view.anchorClicked.connect(self._on_anchor_clicked)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._view)
        self._shown = None

    def show_document(self, doc: Document) -> None:
        state = (doc.url, doc.status, doc.body)
        if state == self._shown:
            return
        self._shown = state
        self._view.setHtml(to_html(doc))

    def _on_anchor_clicked(self, qurl: QUrl):
        self.link_activated.emit(qurl.toString())
