"""Result rendering: a pure view of the orchestrator's SubmissionState."""

import html
from dataclasses import dataclass

from .models import SubmissionState


@dataclass(frozen=True)
class ResultTile:
    """One grid tile; ``index`` is the position in the returned result set."""

    index: int
    url: str


@dataclass(frozen=True)
class ResultView:
    """Everything the results panel displays."""

    tiles: tuple[ResultTile, ...] = ()
    error: str | None = None
    is_generating: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.tiles and not self.error and not self.is_generating


def render_results(state: SubmissionState) -> ResultView:
    """Derive the results panel from a SubmissionState.

    Tiles follow the order the service returned. A failure keeps the tiles
    of the last success next to its message.
    """
    return ResultView(
        tiles=tuple(ResultTile(index=i, url=image.url) for i, image in enumerate(state.results)),
        error=state.error,
        is_generating=state.is_submitting,
    )


def render_html(view: ResultView) -> str:
    """Render a ResultView as an HTML fragment.

    Service error text and image references are escaped before display.

    Returns:
        HTML string, or an empty string when there is nothing to show
    """
    if view.is_empty:
        return ""

    parts = ['<div class="bananagen-results">']
    if view.is_generating:
        parts.append('<p class="bananagen-status">Generating...</p>')
    if view.error:
        parts.append(f'<div class="bananagen-error" role="alert">{html.escape(view.error)}</div>')
    if view.tiles:
        parts.append(
            '<div class="bananagen-grid" style="display:grid;'
            'grid-template-columns:repeat(auto-fill,minmax(200px,1fr));gap:12px">'
        )
        for tile in view.tiles:
            parts.append(
                f'<figure class="bananagen-tile" data-index="{tile.index}">'
                f'<img src="{html.escape(tile.url, quote=True)}" '
                f'alt="Generated image {tile.index + 1}" loading="lazy"/>'
                "</figure>"
            )
        parts.append("</div>")
    parts.append("</div>")
    return "".join(parts)
