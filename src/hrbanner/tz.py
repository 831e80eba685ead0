"""
Timezone abbreviation lookup for the banner subtitle.

Some abbreviations are shared by several zones (CST is Central, China and
Cuba Standard Time). When that happens the zone whose UTC offset is closest to
the configured offset wins; on an exact tie the first listed zone wins.

Offsets are whole hours, rounded toward the zone's standard offset
(e.g. IST → +5, not +5:30).

Source: https://en.wikipedia.org/wiki/List_of_time_zone_abbreviations
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


class TimezoneLookupError(KeyError):
    """Raised when an abbreviation is not in the lookup table."""


@dataclass(frozen=True)
class TZLabel:
    abbreviation: str
    full: str
    utc_offset: int


def lookup_full_tz(abbrev: str, utc_offset: int) -> TZLabel:
    """
    Return the full zone name for an abbreviation.

    Args:
        abbrev: e.g. "CDT".
        utc_offset: configured offset in hours, used to pick between zones
            sharing the abbreviation.

    Raises:
        TimezoneLookupError: if the abbreviation is unknown.
    """
    candidates = TZ_ABBREVIATIONS.get(abbrev)
    if not candidates:
        raise TimezoneLookupError(f"abbrev: {abbrev!r} does not exist in the lookup table")

    best = candidates[0]
    for label in candidates[1:]:
        if abs(utc_offset - label.utc_offset) < abs(utc_offset - best.utc_offset):
            best = label
    return best


TZ_ABBREVIATIONS: Mapping[str, Tuple[TZLabel, ...]] = MappingProxyType({
    "ACDT": (TZLabel("ACDT", "Australian Central Daylight Saving Time", 10),),
    "ACST": (TZLabel("ACST", "Australian Central Standard Time", 9),),
    "ACT": (TZLabel("ACT", "Acre Time", -5),),
    "ACWST": (TZLabel("ACWST", "Australian Central Western Standard Time (unofficial)", 8),),
    "ADT": (TZLabel("ADT", "Atlantic Daylight Time", -3),),
    "AEDT": (TZLabel("AEDT", "Australian Eastern Daylight Saving Time", 11),),
    "AEST": (TZLabel("AEST", "Australian Eastern Standard Time", 10),),
    "AET": (TZLabel("AET", "Australian Eastern Time", 10),),
    "AFT": (TZLabel("AFT", "Afghanistan Time", 4),),
    "AKDT": (TZLabel("AKDT", "Alaska Daylight Time", -8),),
    "AKST": (TZLabel("AKST", "Alaska Standard Time", -9),),
    "ALMT": (TZLabel("ALMT", "Alma-Ata Time", 6),),
    "AMST": (TZLabel("AMST", "Amazon Summer Time (Brazil)", -3),),
    "AMT": (
        TZLabel("AMT", "Amazon Time (Brazil)", -4),
        TZLabel("AMT", "Armenia Time", 4),
    ),
    "ANAT": (TZLabel("ANAT", "Anadyr Time", 12),),
    "AQTT": (TZLabel("AQTT", "Aqtobe Time", 5),),
    "ART": (TZLabel("ART", "Argentina Time", -3),),
    "AST": (
        TZLabel("AST", "Arabia Standard Time", 3),
        TZLabel("AST", "Atlantic Standard Time", -4),
    ),
    "AWST": (TZLabel("AWST", "Australian Western Standard Time", 8),),
    "AZOST": (TZLabel("AZOST", "Azores Summer Time", 0),),
    "AZOT": (TZLabel("AZOT", "Azores Standard Time", -1),),
    "AZT": (TZLabel("AZT", "Azerbaijan Time", 4),),
    "BNT": (TZLabel("BNT", "Brunei Time", 8),),
    "BIOT": (TZLabel("BIOT", "British Indian Ocean Time", 6),),
    "BIT": (TZLabel("BIT", "Baker Island Time", -12),),
    "BOT": (TZLabel("BOT", "Bolivia Time", -4),),
    "BRST": (TZLabel("BRST", "Brasília Summer Time", -2),),
    "BRT": (TZLabel("BRT", "Brasília Time", -3),),
    "BST": (
        TZLabel("BST", "Bangladesh Standard Time", 6),
        TZLabel("BST", "Bougainville Standard Time", 11),
    ),
    "BTT": (TZLabel("BTT", "Bhutan Time", 6),),
    "CAT": (TZLabel("CAT", "Central Africa Time", 2),),
    "CCT": (TZLabel("CCT", "Cocos Islands Time", 6),),
    "CDT": (
        TZLabel("CDT", "Central Daylight Time (North America)", -5),
        TZLabel("CDT", "Cuba Daylight Time", -4),
    ),
    "CEST": (TZLabel("CEST", "Central European Summer Time (Cf. HAEC)", 2),),
    "CET": (TZLabel("CET", "Central European Time", 1),),
    "CHADT": (TZLabel("CHADT", "Chatham Daylight Time", 13),),
    "CHAST": (TZLabel("CHAST", "Chatham Standard Time", 12),),
    "CHOT": (TZLabel("CHOT", "Choibalsan Standard Time", 8),),
    "CHOST": (TZLabel("CHOST", "Choibalsan Summer Time", 9),),
    "CHST": (TZLabel("CHST", "Chamorro Standard Time", 10),),
    "CHUT": (TZLabel("CHUT", "Chuuk Time", 10),),
    "CIST": (TZLabel("CIST", "Clipperton Island Standard Time", -8),),
    "CKT": (TZLabel("CKT", "Cook Island Time", -10),),
    "CLST": (TZLabel("CLST", "Chile Summer Time", -3),),
    "CLT": (TZLabel("CLT", "Chile Standard Time", -4),),
    "COST": (TZLabel("COST", "Colombia Summer Time", -4),),
    "COT": (TZLabel("COT", "Colombia Time", -5),),
    "CST": (
        TZLabel("CST", "Central Standard Time (North America)", -6),
        TZLabel("CST", "China Standard Time", 8),
        TZLabel("CST", "Cuba Standard Time", -5),
    ),
    "CT": (TZLabel("CT", "Central Time", -6),),
    "CVT": (TZLabel("CVT", "Cape Verde Time", -1),),
    "CWST": (TZLabel("CWST", "Central Western Standard Time (Australia) unofficial", 8),),
    "CXT": (TZLabel("CXT", "Christmas Island Time", 7),),
    "DAVT": (TZLabel("DAVT", "Davis Time", 7),),
    "DDUT": (TZLabel("DDUT", "Dumont d'Urville Time", 10),),
    "DFT": (TZLabel("DFT", "AIX-specific equivalent of Central European Time", 1),),
    "EASST": (TZLabel("EASST", "Easter Island Summer Time", -5),),
    "EAST": (TZLabel("EAST", "Easter Island Standard Time", -6),),
    "EAT": (TZLabel("EAT", "East Africa Time", 3),),
    "ECT": (
        TZLabel("ECT", "Eastern Caribbean Time", -4),
        TZLabel("ECT", "Ecuador Time", -5),
    ),
    "EDT": (TZLabel("EDT", "Eastern Daylight Time (North America)", -4),),
    "EEST": (TZLabel("EEST", "Eastern European Summer Time", 3),),
    "EET": (TZLabel("EET", "Eastern European Time", 2),),
    "EGST": (TZLabel("EGST", "Eastern Greenland Summer Time", 0),),
    "EGT": (TZLabel("EGT", "Eastern Greenland Time", -1),),
    "EST": (TZLabel("EST", "Eastern Standard Time (North America)", -5),),
    "FET": (TZLabel("FET", "Further-eastern European Time", 3),),
    "FJT": (TZLabel("FJT", "Fiji Time", 12),),
    "FKST": (TZLabel("FKST", "Falkland Islands Summer Time", -3),),
    "FKT": (TZLabel("FKT", "Falkland Islands Time", -4),),
    "FNT": (TZLabel("FNT", "Fernando de Noronha Time", -2),),
    "GALT": (TZLabel("GALT", "Galápagos Time", -6),),
    "GAMT": (TZLabel("GAMT", "Gambier Islands Time", -9),),
    "GET": (TZLabel("GET", "Georgia Standard Time", 4),),
    "GFT": (TZLabel("GFT", "French Guiana Time", -3),),
    "GILT": (TZLabel("GILT", "Gilbert Island Time", 12),),
    "GIT": (TZLabel("GIT", "Gambier Island Time", -9),),
    "GMT": (TZLabel("GMT", "Greenwich Mean Time", 0),),
    "GST": (
        TZLabel("GST", "South Georgia and the South Sandwich Islands Time", -2),
        TZLabel("GST", "Gulf Standard Time", 4),
    ),
    "GYT": (TZLabel("GYT", "Guyana Time", -4),),
    "HDT": (TZLabel("HDT", "Hawaii–Aleutian Daylight Time", -9),),
    "HAEC": (TZLabel("HAEC", "Heure Avancée d'Europe Centrale", 2),),
    "HST": (TZLabel("HST", "Hawaii–Aleutian Standard Time", -10),),
    "HKT": (TZLabel("HKT", "Hong Kong Time", 8),),
    "HMT": (TZLabel("HMT", "Heard and McDonald Islands Time", 5),),
    "HOVST": (TZLabel("HOVST", "Hovd Summer Time", 8),),
    "HOVT": (TZLabel("HOVT", "Hovd Time", 7),),
    "ICT": (TZLabel("ICT", "Indochina Time", 7),),
    "IDLW": (TZLabel("IDLW", "International Day Line West", -12),),
    "IDT": (TZLabel("IDT", "Israel Daylight Time", 3),),
    "IOT": (TZLabel("IOT", "Indian Ocean Time", 3),),
    "IRDT": (TZLabel("IRDT", "Iran Daylight Time", 4),),
    "IRKT": (TZLabel("IRKT", "Irkutsk Time", 8),),
    "IRST": (TZLabel("IRST", "Iran Standard Time", 3),),
    "IST": (
        TZLabel("IST", "Indian Standard Time", 5),
        TZLabel("IST", "Irish Standard Time", 1),
        TZLabel("IST", "Israel Standard Time", 2),
    ),
    "JST": (TZLabel("JST", "Japan Standard Time", 9),),
    "KALT": (TZLabel("KALT", "Kaliningrad Time", 2),),
    "KGT": (TZLabel("KGT", "Kyrgyzstan Time", 6),),
    "KOST": (TZLabel("KOST", "Kosrae Time", 11),),
    "KRAT": (TZLabel("KRAT", "Krasnoyarsk Time", 7),),
    "KST": (TZLabel("KST", "Korea Standard Time", 9),),
    "LHST": (TZLabel("LHST", "Lord Howe Standard Time", 10),),
    "LINT": (TZLabel("LINT", "Line Islands Time", 14),),
    "MAGT": (TZLabel("MAGT", "Magadan Time", 12),),
    "MART": (TZLabel("MART", "Marquesas Islands Time", -9),),
    "MAWT": (TZLabel("MAWT", "Mawson Station Time", 5),),
    "MDT": (TZLabel("MDT", "Mountain Daylight Time (North America)", -6),),
    "MET": (TZLabel("MET", "Middle European Time (same zone as CET)", 1),),
    "MEST": (TZLabel("MEST", "Middle European Summer Time (same zone as CEST)", 2),),
    "MHT": (TZLabel("MHT", "Marshall Islands Time", 12),),
    "MIST": (TZLabel("MIST", "Macquarie Island Station Time", 11),),
    "MIT": (TZLabel("MIT", "Marquesas Islands Time", -9),),
    "MMT": (TZLabel("MMT", "Myanmar Standard Time", 6),),
    "MSK": (TZLabel("MSK", "Moscow Time", 3),),
    "MST": (
        TZLabel("MST", "Malaysia Standard Time", 8),
        TZLabel("MST", "Mountain Standard Time (North America)", -7),
    ),
    "MUT": (TZLabel("MUT", "Mauritius Time", 4),),
    "MVT": (TZLabel("MVT", "Maldives Time", 5),),
    "MYT": (TZLabel("MYT", "Malaysia Time", 8),),
    "NCT": (TZLabel("NCT", "New Caledonia Time", 11),),
    "NDT": (TZLabel("NDT", "Newfoundland Daylight Time", -2),),
    "NFT": (TZLabel("NFT", "Norfolk Island Time", 11),),
    "NOVT": (TZLabel("NOVT", "Novosibirsk Time", 7),),
    "NPT": (TZLabel("NPT", "Nepal Time", 5),),
    "NST": (TZLabel("NST", "Newfoundland Standard Time", -3),),
    "NT": (TZLabel("NT", "Newfoundland Time", -3),),
    "NUT": (TZLabel("NUT", "Niue Time", -11),),
    "NZDT": (TZLabel("NZDT", "New Zealand Daylight Time", 13),),
    "NZST": (TZLabel("NZST", "New Zealand Standard Time", 12),),
    "OMST": (TZLabel("OMST", "Omsk Time", 6),),
    "ORAT": (TZLabel("ORAT", "Oral Time", 5),),
    "PDT": (TZLabel("PDT", "Pacific Daylight Time (North America)", -7),),
    "PET": (TZLabel("PET", "Peru Time", -5),),
    "PETT": (TZLabel("PETT", "Kamchatka Time", 12),),
    "PGT": (TZLabel("PGT", "Papua New Guinea Time", 10),),
    "PHOT": (TZLabel("PHOT", "Phoenix Island Time", 13),),
    "PHT": (TZLabel("PHT", "Philippine Time", 8),),
    "PKT": (TZLabel("PKT", "Pakistan Standard Time", 5),),
    "PMDT": (TZLabel("PMDT", "Saint Pierre and Miquelon Daylight Time", -2),),
    "PMST": (TZLabel("PMST", "Saint Pierre and Miquelon Standard Time", -3),),
    "PONT": (TZLabel("PONT", "Pohnpei Standard Time", 11),),
    "PST": (
        TZLabel("PST", "Pacific Standard Time (North America)", -8),
        TZLabel("PST", "Philippine Standard Time", 8),
    ),
    "PWT": (TZLabel("PWT", "Palau Time", 9),),
    "PYST": (TZLabel("PYST", "Paraguay Summer Time", -3),),
    "PYT": (TZLabel("PYT", "Paraguay Time", -4),),
    "RET": (TZLabel("RET", "Réunion Time", 4),),
    "ROTT": (TZLabel("ROTT", "Rothera Research Station Time", -3),),
    "SAKT": (TZLabel("SAKT", "Sakhalin Island Time", 11),),
    "SAMT": (TZLabel("SAMT", "Samara Time", 4),),
    "SAST": (TZLabel("SAST", "South African Standard Time", 2),),
    "SBT": (TZLabel("SBT", "Solomon Islands Time", 11),),
    "SCT": (TZLabel("SCT", "Seychelles Time", 4),),
    "SDT": (TZLabel("SDT", "Samoa Daylight Time", -10),),
    "SGT": (TZLabel("SGT", "Singapore Time", 8),),
    "SLST": (TZLabel("SLST", "Sri Lanka Standard Time", 5),),
    "SRET": (TZLabel("SRET", "Srednekolymsk Time", 11),),
    "SRT": (TZLabel("SRT", "Suriname Time", -3),),
    "SST": (
        TZLabel("SST", "Samoa Standard Time", -11),
        TZLabel("SST", "Singapore Standard Time", 8),
    ),
    "SYOT": (TZLabel("SYOT", "Showa Station Time", 3),),
    "TAHT": (TZLabel("TAHT", "Tahiti Time", -10),),
    "THA": (TZLabel("THA", "Thailand Standard Time", 7),),
    "TFT": (TZLabel("TFT", "French Southern and Antarctic Time", 5),),
    "TJT": (TZLabel("TJT", "Tajikistan Time", 5),),
    "TKT": (TZLabel("TKT", "Tokelau Time", 13),),
    "TLT": (TZLabel("TLT", "Timor Leste Time", 9),),
    "TMT": (TZLabel("TMT", "Turkmenistan Time", 5),),
    "TRT": (TZLabel("TRT", "Turkey Time", 3),),
    "TOT": (TZLabel("TOT", "Tonga Time", 13),),
    "TVT": (TZLabel("TVT", "Tuvalu Time", 12),),
    "ULAST": (TZLabel("ULAST", "Ulaanbaatar Summer Time", 9),),
    "ULAT": (TZLabel("ULAT", "Ulaanbaatar Standard Time", 8),),
    "UTC": (TZLabel("UTC", "Coordinated Universal Time", 0),),
    "UYST": (TZLabel("UYST", "Uruguay Summer Time", -2),),
    "UYT": (TZLabel("UYT", "Uruguay Standard Time", -3),),
    "UZT": (TZLabel("UZT", "Uzbekistan Time", 5),),
    "VET": (TZLabel("VET", "Venezuelan Standard Time", -4),),
    "VLAT": (TZLabel("VLAT", "Vladivostok Time", 10),),
    "VOLT": (TZLabel("VOLT", "Volgograd Time", 4),),
    "VOST": (TZLabel("VOST", "Vostok Station Time", 6),),
    "VUT": (TZLabel("VUT", "Vanuatu Time", 11),),
    "WAKT": (TZLabel("WAKT", "Wake Island Time", 12),),
    "WAST": (TZLabel("WAST", "West Africa Summer Time", 2),),
    "WAT": (TZLabel("WAT", "West Africa Time", 1),),
    "WEST": (TZLabel("WEST", "Western European Summer Time", 1),),
    "WET": (TZLabel("WET", "Western European Time", 0),),
    "WIB": (TZLabel("WIB", "Western Indonesian Time", 7),),
    "WIT": (TZLabel("WIT", "Eastern Indonesian Time", 9),),
    "WITA": (TZLabel("WITA", "Central Indonesia Time", 8),),
    "WGST": (TZLabel("WGST", "West Greenland Summer Time", -2),),
    "WGT": (TZLabel("WGT", "West Greenland Time", -3),),
    "WST": (TZLabel("WST", "Western Standard Time", 8),),
    "YAKT": (TZLabel("YAKT", "Yakutsk Time", 9),),
    "YEKT": (TZLabel("YEKT", "Yekaterinburg Time", 5),),
})
