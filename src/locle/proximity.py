"""Distance-to-band classification."""

from __future__ import annotations

from .models import Band

# Greatest centroid-to-centroid distance across the island, in km.
MAX_DISTANCE_KM = 470.0

# Lower bounds, evaluated high to low; the first match wins.
BAND_THRESHOLDS: tuple[tuple[float, Band], ...] = (
    (0.75, Band.COLD_1),
    (0.55, Band.COLD_2),
    (0.40, Band.WARM_1),
    (0.25, Band.WARM_2),
    (0.15, Band.WARM_3),
    (0.05, Band.HOT),
)

BAND_COLOURS: dict[Band, str] = {
    Band.COLD_1: "#1864ab",
    Band.COLD_2: "#4dabf7",
    Band.WARM_1: "#74c0fc",
    Band.WARM_2: "#ffd43b",
    Band.WARM_3: "#ffa94d",
    Band.HOT: "#ff6b6b",
    Band.CORRECT: "#00ff88",
}

BAND_EMOJIS: dict[Band, str] = {
    Band.COLD_1: "🔵",
    Band.COLD_2: "🔷",
    Band.WARM_1: "🟦",
    Band.WARM_2: "🟡",
    Band.WARM_3: "🟠",
    Band.HOT: "🔴",
    Band.CORRECT: "🎯",
}


def classify(distance_km: float, max_distance_km: float = MAX_DISTANCE_KM) -> Band:
    if max_distance_km <= 0:
        raise ValueError("max_distance_km must be positive")
    ratio = distance_km / max_distance_km
    for lower_bound, band in BAND_THRESHOLDS:
        if ratio >= lower_bound:
            return band
    return Band.CORRECT
