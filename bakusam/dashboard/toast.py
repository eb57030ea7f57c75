import logging

logger = logging.getLogger(__name__)

class Toast:
    def __init__(self, title: str, description: str, variant: str = "default"):
        self.title = title
        self.description = description
        self.variant = variant

    def __repr__(self):
        return f"Toast({self.title!r}, {self.description!r}, variant={self.variant!r})"

class Toaster:
    """Collects user-facing notifications; ``destructive`` marks errors."""

    def __init__(self, limit: int = 20):
        self.limit = limit
        self.toasts = []

    def show(self, title: str, description: str, variant: str = "default") -> Toast:
        toast = Toast(title, description, variant)
        self.toasts.append(toast)
        del self.toasts[:-self.limit]
        if variant == "destructive":
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return toast

    def success(self, description: str, title: str = "Berhasil") -> Toast:
        return self.show(title, description)

    def error(self, description: str, title: str = "Error") -> Toast:
        return self.show(title, description, variant="destructive")

    @property
    def last(self):
        return self.toasts[-1] if self.toasts else None

    def dismiss_all(self):
        self.toasts.clear()
