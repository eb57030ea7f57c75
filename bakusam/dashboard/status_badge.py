STATUS_STYLES = {
    "active": ("Aktif", "status-active"),
    "completed": ("Selesai", "status-active"),
    "verified": ("Terverifikasi", "status-active"),
    "suspended": ("Ditangguhkan", "status-suspended"),
    "delivery": ("Dalam Perjalanan", "status-suspended"),
    "pickup": ("Menuju Pickup", "status-suspended"),
    "pending": ("Menunggu", "status-pending"),
    "assigned": ("Ditugaskan", "status-pending"),
    "cancelled": ("Dibatalkan", "status-cancelled"),
    "blocked": ("Diblokir", "status-cancelled"),
    "rejected": ("Ditolak", "status-cancelled"),
}

DEFAULT_CLASS = "status-pending"

def status_color(status: str) -> str:
    style = STATUS_STYLES.get(status.lower())
    return style[1] if style else DEFAULT_CLASS

def status_text(status: str) -> str:
    style = STATUS_STYLES.get(status.lower())
    return style[0] if style else status

def status_badge(status: str) -> tuple:
    """(label, css class) for a driver, order, vehicle or customer status."""
    return status_text(status), status_color(status)

def format_currency(amount) -> str:
    """Rupiah without decimals, e.g. ``Rp 16.000``."""
    value = round(float(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}Rp {abs(value):,}".replace(",", ".")

def format_distance(distance) -> str:
    return f"{float(distance):.1f} km"
