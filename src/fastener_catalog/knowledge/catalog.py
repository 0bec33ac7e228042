"""Built-in DIN/ISO fastener standards table.

Relationships are listed exactly as published in the catalog data and are not
symmetric: ``DIN933.similar`` names ``DIN931`` while ``DIN933.equivalent`` is
only ``ISO4017``. Lookups must use the entry of the code being asked about.
"""

from __future__ import annotations

from fastener_catalog.knowledge.standards import StandardInfo, format_standard_for_display


def _entry(
    code: str,
    description: str,
    product_type: str,
    *,
    equivalent: tuple[str, ...] = (),
    similar: tuple[str, ...] = (),
    keywords: tuple[str, ...] = (),
) -> StandardInfo:
    return StandardInfo(
        code=code,
        display_code=format_standard_for_display(code),
        description=description,
        product_type=product_type,
        equivalent=equivalent,
        similar=similar,
        keywords=keywords,
    )


BUILTIN_STANDARDS: tuple[StandardInfo, ...] = (
    # Hex bolts
    _entry(
        "DIN933",
        "Hexagon head bolt, full thread",
        "bolt",
        equivalent=("ISO4017",),
        similar=("DIN931", "ISO4014"),
        keywords=("hex bolt", "full thread", "hexagon", "perno hexagonal"),
    ),
    _entry(
        "DIN931",
        "Hexagon head bolt, partial thread",
        "bolt",
        equivalent=("ISO4014",),
        similar=("DIN933", "ISO4017"),
        keywords=("hex bolt", "partial thread", "hexagon", "perno"),
    ),
    _entry(
        "DIN960",
        "Hexagon head bolt, partial thread, fine pitch",
        "bolt",
        equivalent=("ISO8765",),
        similar=("DIN961",),
        keywords=("hex bolt", "fine thread", "fine pitch"),
    ),
    _entry(
        "DIN961",
        "Hexagon head bolt, full thread, fine pitch",
        "bolt",
        similar=("DIN960", "ISO8676"),
        keywords=("hex bolt", "fine thread", "full thread"),
    ),
    _entry(
        "ISO4017",
        "Hexagon head screw, full thread",
        "bolt",
        equivalent=("DIN933",),
        similar=("ISO4014", "DIN931"),
        keywords=("hex bolt", "full thread", "hexagon"),
    ),
    _entry(
        "ISO4014",
        "Hexagon head bolt, partial thread",
        "bolt",
        equivalent=("DIN931",),
        similar=("ISO4017", "DIN933"),
        keywords=("hex bolt", "partial thread", "hexagon"),
    ),
    _entry(
        "ISO8765",
        "Hexagon head bolt, fine pitch thread",
        "bolt",
        equivalent=("DIN960",),
        similar=("DIN933", "DIN931"),
        keywords=("hex bolt", "fine pitch", "fine thread"),
    ),
    # Socket cap screws
    _entry(
        "DIN912",
        "Socket head cap screw",
        "screw",
        equivalent=("ISO4762",),
        similar=("DIN7984",),
        keywords=("socket cap", "allen", "cylinder head", "SHCS", "tornillo allen"),
    ),
    _entry(
        "DIN7984",
        "Low head socket cap screw",
        "screw",
        similar=("DIN912", "ISO4762", "ISO14580"),
        keywords=("low head", "socket cap", "thin head"),
    ),
    _entry(
        "DIN7991",
        "Countersunk socket head cap screw",
        "screw",
        equivalent=("ISO10642",),
        keywords=("countersunk", "flat head", "socket", "CSK"),
    ),
    _entry(
        "ISO4762",
        "Socket head cap screw",
        "screw",
        equivalent=("DIN912",),
        keywords=("socket cap", "allen", "SHCS"),
    ),
    _entry(
        "ISO10642",
        "Countersunk socket head cap screw",
        "screw",
        equivalent=("DIN7991",),
        keywords=("countersunk", "flat head", "socket"),
    ),
    _entry(
        "ISO7380",
        "Button head socket cap screw",
        "screw",
        keywords=("button head", "dome head", "socket"),
    ),
    # Set screws
    _entry(
        "DIN913",
        "Socket set screw, flat point",
        "screw",
        equivalent=("ISO4026",),
        keywords=("set screw", "grub screw", "flat point"),
    ),
    _entry(
        "DIN914",
        "Socket set screw, cone point",
        "screw",
        equivalent=("ISO4027",),
        keywords=("set screw", "grub screw", "cone point"),
    ),
    _entry(
        "DIN915",
        "Socket set screw, dog point",
        "screw",
        equivalent=("ISO4028",),
        keywords=("set screw", "grub screw", "dog point"),
    ),
    _entry(
        "DIN916",
        "Socket set screw, cup point",
        "screw",
        equivalent=("ISO4029",),
        keywords=("set screw", "grub screw", "cup point"),
    ),
    # Machine screws
    _entry(
        "DIN965",
        "Countersunk head screw, Phillips",
        "screw",
        equivalent=("ISO7046",),
        keywords=("countersunk", "phillips", "machine screw"),
    ),
    _entry(
        "DIN966",
        "Raised countersunk head screw",
        "screw",
        equivalent=("ISO7047",),
        keywords=("raised countersunk", "oval head"),
    ),
    _entry(
        "DIN84",
        "Slotted cheese head screw",
        "screw",
        equivalent=("ISO1207",),
        keywords=("cheese head", "slotted", "machine screw"),
    ),
    _entry(
        "DIN85",
        "Slotted pan head screw",
        "screw",
        equivalent=("ISO1580",),
        keywords=("pan head", "slotted"),
    ),
    # Nuts
    _entry(
        "DIN934",
        "Hexagon nut",
        "nut",
        equivalent=("ISO4032", "ISO4033"),
        similar=("DIN439",),
        keywords=("hex nut", "hexagon nut", "tuerca hexagonal"),
    ),
    _entry(
        "DIN439",
        "Hexagon thin nut (jam nut)",
        "nut",
        equivalent=("ISO4035",),
        keywords=("thin nut", "jam nut", "low nut"),
    ),
    _entry(
        "DIN985",
        "Prevailing torque hex nut with nylon insert (Nyloc)",
        "nut",
        equivalent=("ISO10511", "ISO7040"),
        keywords=("nyloc", "lock nut", "prevailing torque", "self-locking"),
    ),
    _entry(
        "DIN1587",
        "Hexagon domed cap nut",
        "nut",
        equivalent=("ISO1587",),
        keywords=("dome nut", "cap nut", "acorn nut"),
    ),
    _entry(
        "DIN6923",
        "Hexagon flange nut",
        "nut",
        equivalent=("ISO4161",),
        keywords=("flange nut", "serrated flange"),
    ),
    _entry(
        "DIN6334",
        "Hexagon coupling nut",
        "nut",
        keywords=("coupling nut", "extension nut", "long nut"),
    ),
    _entry(
        "ISO4032",
        "Hexagon nut, style 1",
        "nut",
        equivalent=("DIN934",),
        keywords=("hex nut", "hexagon nut"),
    ),
    _entry(
        "ISO4033",
        "Hexagon nut, style 2 (thicker)",
        "nut",
        equivalent=("DIN934",),
        keywords=("hex nut", "thick nut"),
    ),
    _entry(
        "ISO7040",
        "Prevailing torque type hexagon nut, all-metal",
        "nut",
        similar=("DIN985", "ISO10511"),
        keywords=("lock nut", "all metal lock"),
    ),
    _entry(
        "ISO10511",
        "Prevailing torque hex nut, thin, with nylon insert",
        "nut",
        equivalent=("DIN985",),
        keywords=("nyloc", "thin lock nut"),
    ),
    # Washers
    _entry(
        "DIN125",
        "Plain washer, form A and B",
        "washer",
        equivalent=("ISO7089", "ISO7090"),
        keywords=("flat washer", "plain washer", "arandela plana"),
    ),
    _entry(
        "DIN127",
        "Spring lock washer",
        "washer",
        equivalent=("ISO7091",),
        keywords=("spring washer", "lock washer", "split washer", "grower"),
    ),
    _entry(
        "DIN433",
        "Plain washer, small series",
        "washer",
        equivalent=("ISO7092",),
        keywords=("small washer", "narrow washer"),
    ),
    _entry(
        "DIN440",
        "Plain washer for wood constructions",
        "washer",
        equivalent=("ISO7094",),
        keywords=("large washer", "timber washer", "construction washer"),
    ),
    _entry(
        "DIN6796",
        "Conical spring washer (Belleville)",
        "washer",
        keywords=("belleville washer", "disc spring", "conical washer"),
    ),
    _entry(
        "DIN6798",
        "Serrated lock washer",
        "washer",
        keywords=("serrated washer", "tooth lock washer", "star washer"),
    ),
    _entry(
        "DIN9021",
        "Plain washer, large series",
        "washer",
        equivalent=("ISO7093",),
        keywords=("large washer", "fender washer", "penny washer"),
    ),
    _entry(
        "ISO7089",
        "Plain washer, normal series, product grade A",
        "washer",
        equivalent=("DIN125A",),
        keywords=("flat washer", "plain washer"),
    ),
    _entry(
        "ISO7090",
        "Plain washer, chamfered, normal series",
        "washer",
        equivalent=("DIN125B",),
        keywords=("flat washer", "chamfered washer"),
    ),
    # Threaded rods and studs
    _entry(
        "DIN975",
        "Threaded rod",
        "threaded_rod",
        keywords=("threaded rod", "all-thread", "varilla roscada"),
    ),
    _entry(
        "DIN976",
        "Stud bolt (threaded both ends)",
        "threaded_rod",
        keywords=("stud", "stud bolt", "double end stud"),
    ),
    _entry(
        "DIN938",
        "Stud bolt, type B",
        "threaded_rod",
        equivalent=("ISO4026",),
        keywords=("stud", "stud bolt"),
    ),
    _entry(
        "DIN939",
        "Stud bolt, type A",
        "threaded_rod",
        keywords=("stud", "interference fit stud"),
    ),
    # Pins
    _entry(
        "DIN94",
        "Split pin (cotter pin)",
        "pin",
        equivalent=("ISO1234",),
        keywords=("split pin", "cotter pin"),
    ),
    _entry(
        "DIN7",
        "Taper pin",
        "pin",
        equivalent=("ISO2339",),
        keywords=("taper pin", "conical pin"),
    ),
    _entry(
        "DIN1481",
        "Spring type straight pin, slotted",
        "pin",
        equivalent=("ISO8752",),
        keywords=("spring pin", "roll pin", "slotted pin"),
    ),
    _entry(
        "ISO8734",
        "Parallel pin, hardened",
        "pin",
        equivalent=("DIN6325",),
        keywords=("dowel pin", "parallel pin"),
    ),
    # Anchors and accessories
    _entry(
        "DIN302",
        "Expansion anchor",
        "anchor",
        keywords=("anchor", "expansion anchor", "concrete anchor"),
    ),
    _entry(
        "DIN3568",
        "Heavy pipe clamp",
        "pipe_clamp",
        keywords=("pipe clamp",),
    ),
    _entry(
        "DIN741",
        "Wire rope clip",
        "wire_rope_clip",
        keywords=("wire rope clip",),
    ),
)
