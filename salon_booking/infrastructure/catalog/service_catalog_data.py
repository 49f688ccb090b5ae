# Raw catalog rows as entered by salon staff. Durations are free text and are
# parsed once when the catalog is loaded.
RAW_SERVICES: list[dict] = [
    {
        "id": 1,
        "name": "Classic Box Braids",
        "description": "Traditional square-shaped parts with clean lines and uniform size.",
        "price": 20000,
        "duration": "240 minutes",
    },
    {
        "id": 2,
        "name": "Jumbo Box Braids",
        "description": "Larger box braids that take less time to install but are heavier.",
        "price": 18000,
        "duration": "180 minutes",
    },
    {
        "id": 3,
        "name": "Goddess Braids",
        "description": "Raised braids close to the scalp, often in intricate patterns.",
        "price": 22000,
        "duration": "240 minutes",
    },
    {
        "id": 4,
        "name": "Knotless Box Braids",
        "description": "Box braids with a more natural look and less tension at the roots.",
        "price": 22000,
        "duration": "300 minutes",
    },
    {
        "id": 5,
        "name": "Cornrows",
        "description": "Neat braids close to the scalp in straight or curved rows.",
        "price": 8000,
        "duration": "90 minutes",
    },
    {
        "id": 6,
        "name": "Braid Consultation",
        "description": "Style and hair health consultation.",
        "price": 0,
        "duration": "30 min",
    },
]
