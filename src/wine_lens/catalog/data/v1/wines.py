WINES = [
    {
        "id": "1",
        "name": "Opus One",
        "producer": "Opus One Winery",
        "vintage": 2018,
        "region": "Napa Valley",
        "country": "USA",
        "grape_varieties": ["Cabernet Sauvignon", "Merlot", "Petit Verdot", "Cabernet Franc"],
        "price": 450,
        "rating": 96,
        "alcohol_content": "14.5%",
        "description": (
            "Exceptional Bordeaux-style blend showcasing Napa Valley terroir "
            "with complex flavors and elegant structure."
        ),
        "tasting_notes": {
            "appearance": "Deep ruby red with purple highlights",
            "aroma": "Complex aromas of blackcurrant, cedar, vanilla, and tobacco",
            "taste": "Full-bodied with rich flavors of dark fruit, chocolate, and spices",
            "finish": "Long and elegant finish with silky tannins",
        },
        "food_pairings": ["Grilled ribeye steak", "Lamb with rosemary", "Aged cheeses", "Dark chocolate"],
        "serving_temperature": "60-65°F (16-18°C)",
        "decanting_time": "1-2 hours",
        "image_url": "/images/opus-one.jpg",
    },
    {
        "id": "2",
        "name": "Dom Pérignon Vintage",
        "producer": "Moët & Chandon",
        "vintage": 2012,
        "region": "Champagne",
        "country": "France",
        "grape_varieties": ["Chardonnay", "Pinot Noir"],
        "price": 220,
        "rating": 95,
        "alcohol_content": "12.5%",
        "description": (
            "Iconic Champagne representing the pinnacle of elegance with "
            "exceptional balance and refinement."
        ),
        "tasting_notes": {
            "appearance": "Brilliant golden color with fine, persistent bubbles",
            "aroma": "Elegant bouquet of white flowers, citrus, and brioche",
            "taste": "Creamy texture with flavors of apple, pear, and mineral notes",
            "finish": "Long, refined finish with subtle toasted notes",
        },
        "food_pairings": ["Oysters", "Caviar", "White fish", "Soft cheeses"],
        "serving_temperature": "45-50°F (7-10°C)",
        "image_url": "/images/dom-perignon.jpg",
    },
    {
        "id": "3",
        "name": "Caymus Cabernet Sauvignon",
        "producer": "Caymus Vineyards",
        "vintage": 2020,
        "region": "Napa Valley",
        "country": "USA",
        "grape_varieties": ["Cabernet Sauvignon"],
        "price": 85,
        "rating": 92,
        "description": (
            "Classic Napa Cabernet with excellent balance and accessibility, "
            "smooth and supple texture."
        ),
        "tasting_notes": {
            "appearance": "Deep, dark red with garnet highlights",
            "aroma": "Rich aromas of blackberry, cassis, and vanilla oak",
            "taste": "Smooth and supple with ripe fruit flavors and well-integrated tannins",
            "finish": "Medium to long finish with hints of mocha and spice",
        },
        "food_pairings": ["Grilled steaks", "BBQ ribs", "Mushroom dishes", "Hard cheeses"],
        "serving_temperature": "60-65°F (16-18°C)",
        "decanting_time": "30-60 minutes",
        "image_url": "/images/caymus.jpg",
    },
    {
        "id": "4",
        "name": "Cloudy Bay Sauvignon Blanc",
        "producer": "Cloudy Bay",
        "vintage": 2022,
        "region": "Marlborough",
        "country": "New Zealand",
        "grape_varieties": ["Sauvignon Blanc"],
        "price": 25,
        "rating": 90,
        "description": (
            "Quintessential Marlborough Sauvignon Blanc with excellent purity "
            "and vibrant tropical character."
        ),
        "tasting_notes": {
            "appearance": "Pale straw color with green tints",
            "aroma": "Vibrant aromas of passion fruit, gooseberry, and fresh herbs",
            "taste": "Crisp and refreshing with tropical fruit flavors and citrus acidity",
            "finish": "Clean, zesty finish with mineral undertones",
        },
        "food_pairings": ["Seafood", "Salads", "Goat cheese", "Asian cuisine"],
        "serving_temperature": "45-50°F (7-10°C)",
        "image_url": "/images/cloudy-bay.jpg",
    },
    {
        "id": "5",
        "name": "Barolo Brunate",
        "producer": "Marcarini",
        "vintage": 2017,
        "region": "Piedmont",
        "country": "Italy",
        "grape_varieties": ["Nebbiolo"],
        "price": 120,
        "rating": 94,
        "description": (
            "Traditional Barolo showcasing the elegance of Nebbiolo with "
            "complex aromatics and firm structure."
        ),
        "tasting_notes": {
            "appearance": "Garnet red with orange highlights",
            "aroma": "Complex aromas of roses, tar, truffle, and red cherry",
            "taste": "Full-bodied with firm tannins, cherry fruit, and earthy undertones",
            "finish": "Very long finish with leather and spice notes",
        },
        "food_pairings": ["Truffle dishes", "Braised beef", "Wild game", "Aged Parmesan"],
        "serving_temperature": "60-65°F (16-18°C)",
        "decanting_time": "2-3 hours",
        "image_url": "/images/barolo-brunate.jpg",
    },
]
