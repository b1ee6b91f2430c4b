"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "비행기 안의 태양시계",
        "en": "Solar Clock in the Sky",
    },
    "label_departure": {
        "ko": "출발 공항 (위도,경도 또는 이름)",
        "en": "Departure (lat,lon or airport name)",
    },
    "label_arrival": {
        "ko": "도착 공항 (위도,경도 또는 이름)",
        "en": "Arrival (lat,lon or airport name)",
    },
    "label_date": {
        "ko": "출발 날짜",
        "en": "Departure date",
    },
    "label_time": {
        "ko": "출발 시각 (현지)",
        "en": "Departure time (local)",
    },
    "label_offset": {
        "ko": "출발지 시간대 (UTC±h)",
        "en": "Departure UTC offset (h)",
    },
    "label_flying_time": {
        "ko": "비행 시간 (hh:mm)",
        "en": "Flying time (hh:mm)",
    },
    "label_progress": {
        "ko": "비행 진행",
        "en": "Flight progress",
    },
    "btn_compute": {
        "ko": "☀ 계산하기",
        "en": "☀ Compute",
    },
    "placeholder": {
        "ko": "출발지와 도착지를 입력하고 태양시계를 확인하세요",
        "en": "Enter a flight to see the solar clock aboard",
    },
    "clock_line": {
        "ko": "비행기 안의 태양시계는 {clock} 를 가리킵니다",
        "en": "The Solar Clock in your plane indicates {clock}",
    },
    "error_input": {
        "ko": "입력을 확인해주세요. ({error})",
        "en": "Please check your input. ({error})",
    },
    "map_title": {
        "ko": "비행 경로와 태양의 경로 (하늘색: 비행기 / 빨강: 태양)",
        "en": "Flight Route and The Sun Path on Flat Map (cyan: Plane / red: Sun)",
    },
    "globe_title": {
        "ko": "지구본 위의 비행 경로와 태양의 경로",
        "en": "Flight Route and The Sun Path on Earth Globe",
    },
    "summary_departure": {
        "ko": "출발",
        "en": "Departure",
    },
    "summary_arrival": {
        "ko": "도착",
        "en": "Arrival",
    },
    "summary_declination": {
        "ko": "태양 적위",
        "en": "Sun declination",
    },
    "summary_sun_longitude": {
        "ko": "출발 시 태양 경도",
        "en": "Sun longitude at departure",
    },
    "summary_points": {
        "ko": "경로 지점 수",
        "en": "Route points",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
