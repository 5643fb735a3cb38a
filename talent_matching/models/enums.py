from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class Category(str, Enum):
    """
    Categoria professionnelle.

    L'ordine di dichiarazione è anche l'ordine di spareggio del classificatore:
    a parità di punteggio vince la categoria dichiarata prima.
    """
    ARCHITECTE = "ARCHITECTE"
    CHEF_DE_PROJET = "CHEF_DE_PROJET"
    SCRUM_MASTER = "SCRUM_MASTER"
    PRODUCT_OWNER = "PRODUCT_OWNER"
    CYBERSECURITE = "CYBERSECURITE"
    INGENIEUR_CLOUD = "INGENIEUR_CLOUD"
    DATA_BI = "DATA_BI"
    DEVOPS_SRE = "DEVOPS_SRE"
    DEVELOPPEUR = "DEVELOPPEUR"
    CONSULTANT_FONCTIONNEL = "CONSULTANT_FONCTIONNEL"
    INGENIEUR_SYSTEME_RESEAU = "INGENIEUR_SYSTEME_RESEAU"
    TECHNICIEN_HELPDESK_N2 = "TECHNICIEN_HELPDESK_N2"
    TECHNICIEN_HELPDESK_N1 = "TECHNICIEN_HELPDESK_N1"
    SUPPORT_TECHNICIEN = "SUPPORT_TECHNICIEN"
    AUTRE = "AUTRE"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.DEVELOPPEUR: "Développeur",
    Category.CHEF_DE_PROJET: "Chef de Projet",
    Category.SUPPORT_TECHNICIEN: "Technicien Support",
    Category.TECHNICIEN_HELPDESK_N1: "Technicien Helpdesk N1",
    Category.TECHNICIEN_HELPDESK_N2: "Technicien Helpdesk N2",
    Category.INGENIEUR_SYSTEME_RESEAU: "Ingénieur Système & Réseau",
    Category.INGENIEUR_CLOUD: "Ingénieur Cloud",
    Category.DATA_BI: "Data / BI",
    Category.DEVOPS_SRE: "DevOps / SRE",
    Category.CYBERSECURITE: "Cybersécurité",
    Category.CONSULTANT_FONCTIONNEL: "Consultant Fonctionnel",
    Category.ARCHITECTE: "Architecte",
    Category.SCRUM_MASTER: "Scrum Master",
    Category.PRODUCT_OWNER: "Product Owner",
    Category.AUTRE: "Autre",
}


class Mobility(str, Enum):
    FULL_REMOTE = "FULL_REMOTE"
    HYBRIDE = "HYBRIDE"
    SUR_SITE = "SUR_SITE"
    FLEXIBLE = "FLEXIBLE"
    DEPLACEMENT_MULTI_SITE = "DEPLACEMENT_MULTI_SITE"


class Availability(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    SOUS_15_JOURS = "SOUS_15_JOURS"
    SOUS_1_MOIS = "SOUS_1_MOIS"
    SOUS_2_MOIS = "SOUS_2_MOIS"
    SOUS_3_MOIS = "SOUS_3_MOIS"
    DATE_PRECISE = "DATE_PRECISE"
    NON_DISPONIBLE = "NON_DISPONIBLE"


class TalentStatus(str, Enum):
    ACTIF = "ACTIF"
    INACTIF = "INACTIF"
    SUSPENDU = "SUSPENDU"


class OfferStatus(str, Enum):
    BROUILLON = "BROUILLON"
    EN_ATTENTE_VALIDATION = "EN_ATTENTE_VALIDATION"
    PUBLIEE = "PUBLIEE"
    POURVUE = "POURVUE"
    FERMEE = "FERMEE"
    ANNULEE = "ANNULEE"


def parse_enum(enum_cls: Type[E], value, default: Optional[E] = None) -> Optional[E]:
    """Converte un valore grezzo nell'enum; valori sconosciuti -> default."""
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        return default
