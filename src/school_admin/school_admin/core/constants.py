"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_SHIFTS = ("Manhã", "Tarde")
DEFAULT_CURRENT_USER_LABEL = "Você"
DEFAULT_UPCOMING_EVENTS_LIMIT = 5
DEFAULT_HISTORY_PERIOD = "week"

WEEK_DAYS = ("Segunda", "Terça", "Quarta", "Quinta", "Sexta")
CHART_WEEK_DAYS = ("Seg", "Ter", "Qua", "Qui", "Sex")

# Class filter value meaning "every class" in roster/chamada queries.
ALL_CLASSES = "all"

EVENT_COLORS = {
    "Aula Especial": "#8b5cf6",
    "Reunião": "#3b82f6",
    "Prova": "#ef4444",
    "Evento": "#10b981",
    "Feriado": "#f59e0b",
    "Outro": "#64748b",
}

GRADE_SUBJECTS = (
    "Português",
    "Matemática",
    "Ciências",
    "História",
    "Geografia",
    "Inglês",
    "Artes",
    "Ed. Física",
    "Outra",
)
BIMESTERS = (1, 2, 3, 4)
MAX_GRADE_VALUE = 10.0
