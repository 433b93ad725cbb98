"""Pytest configuration and fixtures."""

import json

import pytest

from config import Config


class StubConfig(Config):
    OPENAI_API_KEY = "test-key"
    OPENAI_BASE_URL = "https://llm.example.test/v1"
    ANALYSIS_MODEL = "test-model"


class FakeGateway:
    """Records prompts and replays canned replies or errors."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, system_prompt, user_prompt, max_tokens):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.reply


SAMPLE_CONTRACT = """CONTRAT DE PRESTATION DE SERVICES

Article 3.2 - Non-concurrence
Le Prestataire s'interdit, pendant une durée de cinq ans suivant la fin du présent contrat,
d'exercer toute activité concurrente sur l'ensemble du territoire européen, sans qu'aucune
contrepartie financière ne lui soit versée.

Article 5 - Paiement
Les factures sont payables à 90 jours fin de mois à compter de leur réception.

Article 8 - Confidentialité
Chaque partie s'engage à garder confidentielles les informations échangées.
"""


def red_flag(gravite="élevée", **overrides):
    flag = {
        "type": "Clause de non-concurrence abusive",
        "titre": "Non-concurrence de 5 ans",
        "description": "La clause interdit toute activité concurrente pendant 5 ans. Aucune compensation n'est prévue.",
        "citation": "Le Prestataire s'interdit, pendant une durée de cinq ans suivant la fin du présent contrat",
        "gravite": gravite,
        "article": "Article 3.2",
    }
    flag.update(overrides)
    return flag


@pytest.fixture
def stub_config():
    return StubConfig


@pytest.fixture
def sample_contract():
    return SAMPLE_CONTRACT


@pytest.fixture
def analysis_payload():
    return {
        "redFlags": [
            red_flag(),
            red_flag(
                gravite="modérée",
                type="Délais de paiement anormaux",
                titre="Paiement à 90 jours",
                description="Le délai de paiement dépasse 60 jours. Il pèse sur la trésorerie.",
                citation="Les factures sont payables à 90 jours fin de mois à compter de leur réception.",
                article="Article 5",
            ),
        ],
        "standardClauses": [
            {"titre": "Confidentialité", "description": "Obligation réciproque et équilibrée."},
        ],
        "resume": "Contrat déséquilibré sur la non-concurrence et le paiement.",
    }


@pytest.fixture
def analysis_reply(analysis_payload):
    return json.dumps(analysis_payload, ensure_ascii=False)
