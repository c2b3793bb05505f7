"""Reference tables for wine regions, grape varieties and serving guidance."""

# Lower-cased region name -> country. Longer names first so "napa valley"
# wins over shorter overlapping entries during substring scans.
REGION_COUNTRIES = {
    "napa valley": "USA",
    "sonoma": "USA",
    "paso robles": "USA",
    "willamette valley": "USA",
    "columbia valley": "USA",
    "bordeaux": "France",
    "margaux": "France",
    "pauillac": "France",
    "saint-emilion": "France",
    "burgundy": "France",
    "bourgogne": "France",
    "champagne": "France",
    "chablis": "France",
    "rhone": "France",
    "alsace": "France",
    "loire": "France",
    "provence": "France",
    "tuscany": "Italy",
    "toscana": "Italy",
    "piedmont": "Italy",
    "piemonte": "Italy",
    "barolo": "Italy",
    "chianti": "Italy",
    "veneto": "Italy",
    "rioja": "Spain",
    "ribera del duero": "Spain",
    "priorat": "Spain",
    "douro": "Portugal",
    "mosel": "Germany",
    "rheingau": "Germany",
    "barossa": "Australia",
    "mclaren vale": "Australia",
    "marlborough": "New Zealand",
    "central otago": "New Zealand",
    "mendoza": "Argentina",
    "maipo": "Chile",
    "stellenbosch": "South Africa",
}

# Canonical grape spelling -> colour, used for wine type inference.
GRAPE_COLOURS = {
    "Cabernet Sauvignon": "red",
    "Merlot": "red",
    "Pinot Noir": "red",
    "Syrah": "red",
    "Shiraz": "red",
    "Cabernet Franc": "red",
    "Petit Verdot": "red",
    "Malbec": "red",
    "Grenache": "red",
    "Tempranillo": "red",
    "Sangiovese": "red",
    "Nebbiolo": "red",
    "Zinfandel": "red",
    "Chardonnay": "white",
    "Sauvignon Blanc": "white",
    "Pinot Grigio": "white",
    "Pinot Gris": "white",
    "Riesling": "white",
    "Chenin Blanc": "white",
    "Viognier": "white",
    "Gewurztraminer": "white",
}

KNOWN_GRAPES = tuple(GRAPE_COLOURS)

GRAPE_PAIRINGS = {
    "Cabernet Sauvignon": ("Grilled ribeye steak", "Lamb chops", "Aged cheddar"),
    "Merlot": ("Roast chicken", "Mushroom risotto", "Pork tenderloin"),
    "Pinot Noir": ("Roast duck", "Salmon", "Mushroom dishes"),
    "Syrah": ("Barbecue ribs", "Venison", "Smoked meats"),
    "Shiraz": ("Barbecue ribs", "Venison", "Smoked meats"),
    "Cabernet Franc": ("Roast pork", "Goat cheese", "Herb-crusted lamb"),
    "Malbec": ("Grilled steak", "Empanadas", "Blue cheese"),
    "Tempranillo": ("Chorizo", "Roast lamb", "Manchego"),
    "Sangiovese": ("Tomato-based pasta", "Pizza", "Cured meats"),
    "Nebbiolo": ("Truffle dishes", "Braised beef", "Aged Parmesan"),
    "Zinfandel": ("Barbecue", "Burgers", "Spicy sausage"),
    "Chardonnay": ("Lobster", "Roast chicken", "Creamy pasta"),
    "Sauvignon Blanc": ("Goat cheese", "Seafood", "Green salads"),
    "Pinot Grigio": ("Light seafood", "Antipasti", "Salads"),
    "Riesling": ("Spicy Asian cuisine", "Pork", "Fruit desserts"),
    "Chenin Blanc": ("Thai curry", "Roast pork", "Soft cheeses"),
    "Viognier": ("Apricot-glazed chicken", "Curries", "Shellfish"),
}

TYPE_PAIRINGS = {
    "red": ("Red meat", "Hard cheeses", "Hearty stews"),
    "white": ("Seafood", "Poultry", "Salads"),
    "rose": ("Charcuterie", "Grilled vegetables", "Mediterranean dishes"),
    "sparkling": ("Oysters", "Caviar", "Fried appetizers"),
    "dessert": ("Blue cheese", "Fruit tarts", "Foie gras"),
}

SERVING_TEMPERATURES = {
    "red": "60-65°F (16-18°C)",
    "white": "45-50°F (7-10°C)",
    "rose": "45-50°F (7-10°C)",
    "sparkling": "40-45°F (4-7°C)",
    "dessert": "50-55°F (10-13°C)",
}

SPARKLING_REGIONS = ("champagne",)
