"""
Static fitting-room catalog.
"""
from typing import Tuple

from .types import ClothingItem, Scene


SCENES: Tuple[Scene, ...] = (
    Scene(
        id="street",
        label="Street",
        emoji="🏙️",
        prompt="a stylish urban street in Tel Aviv, golden hour lighting, city vibes",
    ),
    Scene(
        id="cafe",
        label="Café",
        emoji="☕",
        prompt="a cozy modern coffee shop, warm light, cappuccino on the table, relaxed atmosphere",
    ),
    Scene(
        id="beach",
        label="Beach",
        emoji="🏖️",
        prompt="a beautiful Mediterranean beach in Israel, blue sea, sunny day, white sand",
    ),
    Scene(
        id="office",
        label="Office",
        emoji="💼",
        prompt="a modern tech startup office, large windows, professional yet casual environment",
    ),
)

_IMG = "https://images.unsplash.com/{}?w=400&h=500&fit=crop"

CATALOG: Tuple[ClothingItem, ...] = (
    ClothingItem("1", "White Linen Shirt", "Zara", 199, "top", "white",
                 _IMG.format("photo-1596755094514-f87e34085b2c"),
                 "Classic white linen shirt, perfect for summer",
                 ("casual", "summer", "classic"), SCENES),
    ClothingItem("2", "Black Slim Jeans", "Levis", 349, "bottom", "black",
                 _IMG.format("photo-1542272604-787c3835535d"),
                 "Slim fit black jeans for any occasion",
                 ("casual", "versatile", "classic"), SCENES),
    ClothingItem("3", "Floral Summer Dress", "H&M", 279, "dress", "multicolor",
                 _IMG.format("photo-1572804013309-59a88b7e92f1"),
                 "Light floral dress, perfect for warm days",
                 ("summer", "feminine", "colorful"), SCENES),
    ClothingItem("4", "Beige Oversized Blazer", "Mango", 449, "outerwear", "beige",
                 _IMG.format("photo-1591047139829-d91aecb6caea"),
                 "Trendy oversized blazer for a chic look",
                 ("office", "chic", "trendy"), SCENES),
    ClothingItem("5", "Navy Striped T-Shirt", "Gap", 149, "top", "navy",
                 _IMG.format("photo-1503341504253-dff4815485f1"),
                 "Classic Breton striped t-shirt",
                 ("casual", "nautical", "classic"), SCENES),
    ClothingItem("6", "Midi Leather Skirt", "Zara", 329, "bottom", "black",
                 _IMG.format("photo-1583496661160-fb5886a0aaaa"),
                 "Sleek midi leather skirt, edgy and elegant",
                 ("evening", "edgy", "chic"), SCENES),
    ClothingItem("7", "Olive Cargo Pants", "Pull&Bear", 249, "bottom", "olive",
                 _IMG.format("photo-1624378439575-d8705ad7ae80"),
                 "Trendy cargo pants with multiple pockets",
                 ("streetwear", "trendy", "casual"), SCENES),
    ClothingItem("8", "White Sneakers", "Nike", 499, "shoes", "white",
                 _IMG.format("photo-1542291026-7eec264c27ff"),
                 "Clean white sneakers, goes with everything",
                 ("casual", "sporty", "versatile"), SCENES),
    ClothingItem("9", "Knit Cream Sweater", "COS", 399, "top", "cream",
                 _IMG.format("photo-1576566588028-4147f3842f27"),
                 "Cozy knit sweater in warm cream tone",
                 ("cozy", "winter", "minimalist"), SCENES),
    ClothingItem("10", "Denim Jacket", "Levis", 499, "outerwear", "blue",
                 _IMG.format("photo-1551537482-f2075a1d41f2"),
                 "Classic denim jacket, a wardrobe essential",
                 ("casual", "classic", "layering"), SCENES),
)
