"""
Page-token bookkeeping for the cursor-only YouTube API.

YouTube only hands out next/prev cursors relative to the page just fetched,
so the selector modals remember the token that produced every visited page.
Going back re-requests the stored token, so a page always reloads with the
cursor it was first fetched with.
"""

from dataclasses import dataclass, field


@dataclass
class PageTokenHistory:
    """Stack of page tokens; ``tokens[n]`` fetches page ``n + 1``."""

    tokens: list[str] = field(default_factory=lambda: [""])
    current_page: int = 1

    @property
    def current_token(self) -> str:
        return self.tokens[self.current_page - 1] if self.current_page <= len(self.tokens) else ""

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def advance(self, next_page_token: str | None) -> bool:
        """
        Move to the next page using the token from the current page's response.

        The token is only recorded the first time this page is left forward;
        revisits reuse the stored token.

        Returns:
            True if the page changed
        """
        if not next_page_token:
            return False
        if len(self.tokens) == self.current_page:
            self.tokens.append(next_page_token)
        self.current_page += 1
        return True

    def back(self) -> bool:
        """Move to the previous page. Returns True if the page changed."""
        if not self.has_prev_page:
            return False
        self.current_page -= 1
        return True

    def reset(self) -> None:
        """Forget all cursors; used when search, order or filter changes."""
        self.tokens = [""]
        self.current_page = 1

    def page_info(self, next_page_token: str | None) -> dict[str, int | bool]:
        return {
            "currentPage": self.current_page,
            "hasNextPage": bool(next_page_token),
            "hasPrevPage": self.has_prev_page,
        }
