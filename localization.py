class Translator:
    """French source strings with an English table."""

    def __init__(self) -> None:
        self.language = "fr"
        self.translations = {
            "fr": {},
            "en": {
                "Lun": "Mon",
                "Mar": "Tue",
                "Mer": "Wed",
                "Jeu": "Thu",
                "Ven": "Fri",
                "Sam": "Sat",
                "Dim": "Sun",
                "Bienvenue": "Welcome",
                "Commencez votre premier entraînement !": "Start your first workout!",
                "Bon Rythme": "On Pace",
                "Volume d'entraînement équilibré.": "Training volume is balanced.",
                "Déséquilibre": "Imbalance",
                "Volume Pectoraux > Dos (Ratio > 1.5).": "Chest volume > Back volume (ratio > 1.5).",
                "Volume Dos > Pectoraux.": "Back volume > Chest volume.",
                "Volume Quadriceps > Ischios (Ratio > 2).": "Quad volume > Hamstring volume (ratio > 2).",
                "Muscle Oublié": "Missing Muscle",
                "{muscle} : aucune série cette semaine.": "{muscle}: no sets this week.",
                "Volume Faible": "Low Volume",
                "{muscle} est sous-dosé (< 10 sets/sem).": "{muscle} is under-dosed (< 10 sets/week).",
            },
        }

    def set_language(self, lang: str) -> None:
        self.language = lang

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

translator = Translator()
