"""Mapping of wire topics (source categories) to output categories.

https://sc.bns.lt/rss lists one topic per item. A topic may feed several output
categories and an output category aggregates several topics. Matching is exact
string equality on the topic title.
"""

import logging

logger = logging.getLogger(__name__)

# (output category, source topics), in output-category order
CATEGORY_MAP: tuple[tuple[str, frozenset[str]], ...] = (
    ("Aktualijos", frozenset({
        "Europos Sąjunga",
        "Krašto apsauga",
        "Politika",
        "Savivalda, regionai",
        "Švietimas",
        "Tarptautiniai santykiai",
        "Teisėsauga",
    })),
    ("Verslas", frozenset({
        "Energetika",
        "IT&T",
        "Maisto pramonė",
        "NT, statyba",
        "Pramonė, gamyba",
        "Prekyba",
        "Socialinė sauga",
        "Transportas",
        "Turizmas",
        "Žiniasklaida",
        "Žemės ūkis",
        "Finansai",
    })),
    ("Margumynai", frozenset({"Ekologija", "Gamta", "Kiti pranešimai"})),
    ("Pramogos", frozenset({"Kultūra", "Laisvalaikis"})),
    ("Sportas", frozenset({"Sportas"})),
    ("Sveikata", frozenset({"Medicina, farmacija", "Sveikata"})),
    ("Technologijos", frozenset({"IT&T"})),
    ("Ekonomika", frozenset({
        "Energetika",
        "Maisto pramonė",
        "NT, statyba",
        "Pramonė, gamyba",
        "Prekyba",
        "Socialinė sauga",
        "Turizmas",
        "Žemės ūkis",
        "Žiniasklaida",
        "Ekonomika",
        "Finansai",
    })),
    ("Transportas", frozenset({"Transportas"})),
)

ALL_CATEGORIES: list[str] = [category for category, _ in CATEGORY_MAP]


def map_topic_to_categories(topic_title: str) -> tuple[str, ...]:
    """Return the output categories a topic feeds, in table order.

    An unmapped topic yields () and a warning; its items stay in the pool but
    are rendered nowhere.
    """
    mapped = tuple(category for category, topics in CATEGORY_MAP if topic_title in topics)
    if not mapped:
        logger.warning("%s not mapped to any category", topic_title)
    return mapped
