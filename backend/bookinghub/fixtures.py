# bookinghub/fixtures.py
"""
Starter data for an empty store: a small vacation catalog and a few
conference rooms. Prices are in cents.
"""

DESTINATIONS = [
    {
        "id": "dest-maldives",
        "name": "Maldives",
        "country": "Maldives",
        "description": "Turquoise lagoons, white sand and overwater villas.",
        "image_url": "https://images.unsplash.com/photo-1514282401047-d79a71a590e8",
        "package_count": 2,
        "price_from": 289900,
        "featured": True,
    },
    {
        "id": "dest-santorini",
        "name": "Santorini",
        "country": "Greece",
        "description": "Whitewashed villages above a volcanic caldera.",
        "image_url": "https://images.unsplash.com/photo-1570077188670-e3a8d69ac5ff",
        "package_count": 1,
        "price_from": 189900,
        "featured": True,
    },
    {
        "id": "dest-bali",
        "name": "Bali",
        "country": "Indonesia",
        "description": "Temples, rice terraces and surf beaches.",
        "image_url": "https://images.unsplash.com/photo-1537996194471-e657df975ab4",
        "package_count": 2,
        "price_from": 59900,
        "featured": True,
    },
    {
        "id": "dest-swiss-alps",
        "name": "Swiss Alps",
        "country": "Switzerland",
        "description": "Glaciers, mountain railways and alpine lakes.",
        "image_url": "https://images.unsplash.com/photo-1531366936337-7c912a4589a7",
        "package_count": 1,
        "price_from": 349900,
        "featured": False,
    },
]

PACKAGES = [
    {
        "id": "pkg-maldives-villa",
        "title": "Overwater Villa Escape",
        "destination_id": "dest-maldives",
        "description": "Seven nights in a private overwater villa with sunset cruise.",
        "image_url": "https://images.unsplash.com/photo-1573843981267-be1999ff37cd",
        "price": 289900,
        "duration": 7,
        "max_guests": 2,
        "rating": 4.9,
        "type": "Beach & Resort",
        "features": ["Private pool", "Butler service"],
        "included": ["Seaplane transfers", "Full board"],
        "activities": ["Snorkeling", "Sunset cruise"],
    },
    {
        "id": "pkg-maldives-dive",
        "title": "Coral Reef Diving Week",
        "destination_id": "dest-maldives",
        "description": "Liveaboard diving across the atolls with certified guides.",
        "image_url": "https://images.unsplash.com/photo-1544551763-46a013bb70d5",
        "price": 319900,
        "duration": 10,
        "max_guests": 4,
        "rating": 4.8,
        "type": "Adventure",
        "features": ["12 guided dives"],
        "included": ["Equipment rental", "All meals"],
        "activities": ["Scuba diving", "Night dive"],
    },
    {
        "id": "pkg-santorini-sunset",
        "title": "Cycladic Sunset Retreat",
        "destination_id": "dest-santorini",
        "description": "Cliffside suite in Oia with wine tasting and caldera sailing.",
        "image_url": "https://images.unsplash.com/photo-1613395877344-13d4a8e0d49e",
        "price": 189900,
        "duration": 5,
        "max_guests": 2,
        "rating": 4.7,
        "type": "Luxury",
        "features": ["Caldera view suite"],
        "included": ["Breakfast", "Airport transfers"],
        "activities": ["Wine tasting", "Catamaran sailing"],
    },
    {
        "id": "pkg-bali-culture",
        "title": "Temples & Rice Terraces",
        "destination_id": "dest-bali",
        "description": "Nine days through Ubud, Tegallalang and the water temples.",
        "image_url": "https://images.unsplash.com/photo-1555400038-63f5ba517a47",
        "price": 129900,
        "duration": 9,
        "max_guests": 6,
        "rating": 4.6,
        "type": "Cultural",
        "features": ["Local guide"],
        "included": ["Boutique hotels", "Temple entry fees"],
        "activities": ["Temple tour", "Cooking class"],
    },
    {
        "id": "pkg-bali-wellness",
        "title": "Ubud Wellness Weekend",
        "destination_id": "dest-bali",
        "description": "Three days of yoga, spa rituals and jungle walks.",
        "image_url": "https://images.unsplash.com/photo-1544161515-4ab6ce6db874",
        "price": 59900,
        "duration": 3,
        "max_guests": 2,
        "rating": 4.5,
        "type": "Luxury",
        "features": ["Daily yoga"],
        "included": ["Spa treatments", "Vegetarian meals"],
        "activities": ["Yoga", "Balinese massage"],
    },
    {
        "id": "pkg-alps-family",
        "title": "Alpine Family Adventure",
        "destination_id": "dest-swiss-alps",
        "description": "Two weeks of mountain railways, lakes and easy hikes for all ages.",
        "image_url": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4",
        "price": 349900,
        "duration": 14,
        "max_guests": 6,
        "rating": 4.8,
        "type": "Family",
        "features": ["Swiss Travel Pass"],
        "included": ["Family rooms", "Half board"],
        "activities": ["Glacier train", "Lake cruise"],
    },
]

ACTIVITIES = [
    {
        "id": "act-snorkeling",
        "name": "Snorkeling",
        "description": "Reef snorkeling with marine biologists.",
        "image_url": "https://images.unsplash.com/photo-1559827260-dc66d52bef19",
        "category": "Water",
    },
    {
        "id": "act-hiking",
        "name": "Mountain Hiking",
        "description": "Guided day hikes on marked alpine trails.",
        "image_url": "https://images.unsplash.com/photo-1551632811-561732d1e306",
        "category": "Adventure",
    },
    {
        "id": "act-cooking",
        "name": "Cooking Class",
        "description": "Market visit followed by a hands-on local cooking lesson.",
        "image_url": "https://images.unsplash.com/photo-1556910103-1c02745aae4d",
        "category": "Culture",
    },
]

ROOMS = [
    {
        "name": "Boardroom A",
        "capacity": 12,
        "location": "Floor 3, East Wing",
        "description": "Executive boardroom with a single long table.",
        "amenities": ["Projector", "Video conferencing", "Whiteboard"],
        "hourly_rate": 7500,
        "image_url": "https://images.unsplash.com/photo-1497366811353-6870744d04b2",
        "is_active": True,
    },
    {
        "name": "Huddle Room",
        "capacity": 4,
        "location": "Floor 2, Open Space",
        "description": "Small room for quick syncs.",
        "amenities": ["TV screen"],
        "hourly_rate": 2500,
        "image_url": "https://images.unsplash.com/photo-1497366216548-37526070297c",
        "is_active": True,
    },
    {
        "name": "Innovation Lab",
        "capacity": 20,
        "location": "Floor 1, West Wing",
        "description": "Flexible workshop space with movable furniture.",
        "amenities": ["Projector", "Whiteboard walls", "Sound system"],
        "hourly_rate": 10000,
        "image_url": "https://images.unsplash.com/photo-1517502884422-41eaead166d4",
        "is_active": True,
    },
    {
        "name": "Training Hall",
        "capacity": 40,
        "location": "Basement",
        "description": "Closed for renovation.",
        "amenities": ["Stage", "Microphones"],
        "hourly_rate": 12000,
        "image_url": None,
        "is_active": False,
    },
]
