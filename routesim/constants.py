"""
Constants for the route playback simulator.

Reference corridor, map defaults and collaborator settings.
"""

from typing import Dict, Tuple


LatLon = Tuple[float, float]  # (lat, lng)


# =============================================================================
# Reference corridor (loop around central Indore), (lat, lng) degrees
# =============================================================================

REFERENCE_LATLON: Tuple[LatLon, ...] = (
    (22.718396874733926, 75.8575600305901),
    (22.718365197717922, 75.85686102849677),
    (22.71827047178062, 75.85616875913867),
    (22.71811360931416, 75.85548989037403),
    (22.717896121200226, 75.85483096093351),
    (22.717620102251384, 75.8541983174157),
    (22.717288211026013, 75.85359805313722),
    (22.71690364421162, 75.85303594942722),
    (22.71647010582391, 75.85251741993235),
    (22.715991771518652, 75.85204745846977),
    (22.71547324836076, 75.85163059093021),
    (22.714919530438685, 75.85127083169488),
    (22.71433595075218, 75.85097164498559),
    (22.71372812983748, 75.85073591151999),
    (22.71310192162525, 75.8505659007922),
    (22.712463357053107, 75.8504632492452),
    (22.711818585976346, 75.85042894454372),
    (22.711173817936523, 75.85046331609807),
    (22.710535262358466, 75.85056603192885),
    (22.709909068751845, 75.85073610190089),
    (22.709301267493004, 75.85097188729452),
    (22.708717711757217, 75.85127111662003),
    (22.708164021160318, 75.85163090752206),
    (22.707645527651984, 75.8520477945619),
    (22.70716722418123, 75.85251776260891),
    (22.70673371662802, 75.85303628551934),
    (22.706349179463178, 75.85359836972908),
    (22.70601731556298, 75.85419860234083),
    (22.705741320564865, 75.85483120324243),
    (22.70552385210678, 75.85549008075493),
    (22.705367004245932, 75.8561688902753),
    (22.705272287302726, 75.85686109534966),
    (22.705240613323646, 75.8575600305901),
    (22.705272287302726, 75.85825896583052),
    (22.705367004245932, 75.85895117090489),
    (22.70552385210678, 75.85962998042525),
    (22.705741320564865, 75.86028885793776),
    (22.70601731556298, 75.86092145883934),
    (22.706349179463178, 75.8615216914511),
    (22.70673371662802, 75.86208377566085),
    (22.70716722418123, 75.86260229857126),
    (22.707645527651984, 75.86307226661827),
    (22.708164021160318, 75.86348915365811),
    (22.708717711757217, 75.86384894456015),
    (22.709301267493004, 75.86414817388567),
    (22.709909068751845, 75.8643839592793),
    (22.710535262358466, 75.86455402925132),
    (22.711173817936523, 75.8646567450821),
    (22.711818585976346, 75.86469111663646),
    (22.712463357053107, 75.86465681193498),
    (22.71310192162525, 75.86455416038797),
    (22.71372812983748, 75.86438414966018),
    (22.71433595075218, 75.86414841619458),
    (22.714919530438685, 75.8638492294853),
    (22.71547324836076, 75.86348947024996),
    (22.715991771518652, 75.8630726027104),
    (22.71647010582391, 75.86260264124782),
    (22.71690364421162, 75.86208411175296),
    (22.717288211026013, 75.86152200804295),
    (22.717620102251384, 75.8609217437645),
    (22.717896121200226, 75.86028910024666),
    (22.71811360931416, 75.85963017080614),
    (22.71827047178062, 75.85895130204152),
    (22.718365197717922, 75.8582590326834),
    (22.718396874733926, 75.8575600305901),
)


# =============================================================================
# Playback
# =============================================================================

TICK_INTERVAL_S = 2.0


# =============================================================================
# Map view
# =============================================================================

MAP_CENTER: LatLon = (22.7196, 75.8577)
MAP_ZOOM = 13
FOLLOW_ZOOM = 16

TILE_LAYERS: Dict[str, Dict[str, str]] = {
    "Standard": {
        "url": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "attribution": '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
    },
    "Satellite": {
        "url": "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        "attribution": "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
                       "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community",
    },
}


# =============================================================================
# Collaborators
# =============================================================================

GRAPHHOPPER_URL = "https://graphhopper.com"
GRAPHHOPPER_VEHICLE = "car"
GRAPHHOPPER_LOCALE = "en"
ROUTING_TIMEOUT_S = 10.0

NOMINATIM_URL = "https://nominatim.openstreetmap.org"
GEOCODE_COUNTRY = "India"
SUGGESTION_LIMIT = 5
GEOCODE_TIMEOUT_S = 10.0
USER_AGENT = "routesim/0.1"
