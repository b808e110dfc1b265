"""
Word and domain lists used to classify candidate sites.

These are data, not logic. Bump LISTS_VERSION whenever an entry changes so
resolution diagnostics can be traced back to the list revision that made them.
"""

LISTS_VERSION = "2025.2"

# Vocabulary seen on organizer- or venue-owned pages
OFFICIAL_SIGNAL_TERMS = [
    r"official",
    r"book tickets",
    r"opening times",
    r"visit us",
    r"family",
    r"kids",
    r"age \d",
    r"merlin",
    r"©",
]

# Resellers, listing sites and aggregators
AGGREGATOR_TERMS = [
    r"ticketmaster",
    r"eventbrite",
    r"timeout\.com",
    r"visitlondoncom",
    r"datathistle",
    r"seetickets",
    r"axs",
    r"ticketweb",
    r"skiddle",
    r"londonboxoffice",
    r"musicalsontour",
    r"lovetheatre",
    r"westendtheatre",
    r"londontheatredirect",
    r"londontheatre",
    r"atgtickets",
    r"todaytix",
    r"london-theater-tickets",
    r"seatplan",
    r"officiallondontheatre",
    r"twickets",
    r"ticketstosee",
    r"longstandingtickets",
    r"secondarymarket",
]

# Well-known venue domains; only ever a scoring bonus
PREFERRED_VENUE_TERMS = [
    r"oldvictheatre",
    r"garricktheatre",
    r"apollo-theatre",
    r"thedinosaurthatpooped",
    r"maddiemoate",
    r"nationaltheatre",
    r"royalcourttheatre",
    r"donmarwarehouse",
    r"almeida",
    r"barbican",
    r"youngvic",
    r"sadlerswells",
    r"roh\.org\.uk",
    r"lyceumtheatre",
    r"lwtheatres",
    r"nimax",
    r"delfontmackintosh",
    r"shakespearesglobe",
    r"southbankcentre",
    r"haroldpintertheatre",
    r"dominiontheatre",
    r"palacetheatre",
    r"sondheimtheatre",
    r"adelphi",
    r"aldwych",
    r"cambridgetheatre",
    r"dukeofyorks",
    r"gielgudtheatre",
    r"noelcowardtheatre",
    r"novellotheatre",
    r"phoenixtheatre",
    r"princeedwardtheatre",
    r"savoytheatre",
    r"trafalgartheatre",
    r"wyndhams",
]

# Substrings that drop a raw search result before it is considered at all
SEARCH_BLACKLIST = [
    "ticketmaster",
    "eventbrite",
    "seetickets",
    "timeout",
    "datathistle",
    "axs",
    "ticketweb",
    "skiddle",
    "todaytix",
    "seatplan",
    "twickets",
    "dayoutwiththekids.co.uk",
    "visitlondon.com",
    "tripadvisor",
    "wikipedia",
    "youtube",
    "facebook",
    "instagram",
    "yelp",
    "imdb",
    "londonboxoffice.co.uk",
    "musicalsontour.co.uk",
    "lovetheatre.com",
    "londontheatredirect.com",
    "officiallondontheatre.com",
]

# Third-party ticket-booking platforms, matched against host and full URL
BOOKING_DOMAIN_PATTERNS = [
    r"datathistle\.com",
    r"ticketmaster\.co\.uk",
    r"ticketmaster\.com",
    r"seetickets\.com",
    r"eventbrite\.(com|co\.uk)/e",
    r"ticketweb\.(com|co\.uk)",
    r"skiddle\.com",
    r"getmein\.com",
    r"tiqets\.com",
    r"atgtickets\.com",
    r"todaytix\.com",
    r"londontheatredirect\.com",
]

# Cinema chains and independents; two or more distinct hosts means a
# multi-venue film listing
CINEMA_HOSTNAMES = [
    "odeon",
    "myvue",
    "vue.co",
    "cineworld",
    "picturehouses",
    "everymancinema",
    "curzon",
    "bfi.org.uk",
    "princecharlescinema",
    "thecastlecinema",
    "electriccinema",
    "genesiscinema",
    "riocinema",
    "thephoenix.org.uk",
    "closeupfilmcentre",
    "barbican.org.uk",
    "ica.art",
    "showcasecinemas",
    "empirecinemas",
    "lexicinema",
]

# Negative query terms
QUERY_ALWAYS_EXCLUDE = ["ticketmaster", "eventbrite", "seetickets", "timeout"]
QUERY_FILM_EXCLUDE = ["theatre", "musical", "stage"]
QUERY_THEATRE_EXCLUDE = ["film", "movie", "cinema"]

# Tag sets and the type hints they add to a search query
FILM_TAGS = {"film", "films", "cinema"}
THEATRE_TAGS = {"theatre", "musical", "musicals"}
CONCERT_TAGS = {"concert", "concerts", "music", "gig", "gigs"}

FILM_HINTS = "film movie screening cinema"
THEATRE_HINTS = "theatre musical stage"
CONCERT_HINTS = "concert live performance"

# Page words that veto a film candidate
FILM_MISMATCH_WORDS = ["musical", "theatre"]
