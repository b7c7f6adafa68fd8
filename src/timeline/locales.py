"""
Multilingual lookup tables for asset exports.

Supports EN, FR, IT and DE exports. Adding a language only means adding
entries here.
"""

from typing import Dict, Tuple

# Canonical field -> literal header text per locale
HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "asset_id": ("ASSET ID", "ID D'ACTIF", "ID D’ACTIF", "ID ASSET", "ASSET-ID"),
    "product_name": ("PRODUCT NAME", "NOM DU PRODUIT", "NOME DEL PRODOTTO", "PRODUKTNAME"),
    "product_type": ("PRODUCT TYPE", "TYPE DE PRODUIT", "TIPO DI PRODOTTO", "PRODUKTTYP"),
    "install_base_age": (
        "INSTALL BASE AGE",
        "ÂGE DE LA BASE D'INSTALLATION",
        "ÂGE DE LA BASE D’INSTALLATION",
        "ETÀ BASE INSTALLATA",
        "ALTER DER INSTALLATIONSBASIS",
    ),
    "location_id": (
        "LOCATION ID",
        "ID D'EMPLACEMENT",
        "ID D’EMPLACEMENT",
        "ID POSIZIONE",
        "STANDORT-ID",
    ),
    "location_name": (
        "LOCATION NAME",
        "NOM DE L'EMPLACEMENT",
        "NOM DE L’EMPLACEMENT",
        "NOME POSIZIONE",
        "STANDORTNAME",
    ),
    "services_status": (
        "SERVICES STATUS",
        "STATUT DES SERVICES",
        "STATO DEI SERVIZI",
        "SERVICESTATUS",
    ),
    "contract_end_date": (
        "CONTRACT END DATE",
        "DATE DE FIN DU CONTRAT",
        "DATA DI FINE CONTRATTO",
        "VERTRAGSENDE",
    ),
    "end_of_standard_support": (
        "END OF STANDARD SUPPORT",
        "FIN DU SUPPORT STANDARD",
        "FINE DEL SUPPORTO STANDARD",
        "ENDE DES STANDARDSUPPORTS",
    ),
    "city": ("CITY", "VILLE", "CITTÀ", "STADT"),
    "country": ("COUNTRY", "PAYS", "PAESE", "LAND"),
}

CANONICAL_FIELDS: Tuple[str, ...] = tuple(HEADER_ALIASES)

# Product type values that count as hardware
HARDWARE_VALUES: Tuple[str, ...] = ("HARDWARE", "MATÉRIEL", "MATERIALE")

# Services status values that count as an active contract
ACTIVE_VALUES: Tuple[str, ...] = ("Active", "Actif", "Attivo", "Aktiv")
