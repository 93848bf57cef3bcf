# callmetrics/constants.py
# Column aliases, outcome vocabulary and display labels

# Canonical field -> accepted header spellings (matched case-insensitively).
# Earlier aliases win when a sheet carries more than one of them.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("Data", "Date"),
    "operator": ("Operador", "Nome do Atendente", "nomeAtendente", "Operator", "Agent"),
    "talk_time": ("Tempo Falado", "tempoAtendimento", "Talk Time"),
    "rating_attendance": ("Pergunta 1", "Avaliação Atendente", "avaliacaoAtendente"),
    "rating_resolution": ("Pergunta 2", "Avaliação Solução", "avaliacaoSolucao"),
    "outcome": ("Chamada", "Contagem das chamadas", "contagemChamadas", "Status", "Outcome"),
    "disconnection": ("Desconexao", "Desconexão da chamada", "desconexaoChamada"),
}

ANSWERED_OUTCOMES: tuple[str, ...] = (
    "Atendidas",
    "Atendida",
    "Atendido",
    "Answered",
    "Atendida com sucesso",
    "Concluída",
)

MAX_RATING: float = 5.0

# Defaults rendered when an engine has nothing to measure
EMPTY_COUNT_DISPLAY = "0"
EMPTY_TIME_DISPLAY = "0:00"
EMPTY_RATING_DISPLAY = "0.0"

MONTH_NAMES_PT: tuple[str, ...] = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

LABEL_YESTERDAY = "Ontem"
LABEL_WEEK = "Semana ({start} - {end})"
LABEL_MONTH = "Mês ({month} de {year})"
LABEL_YEAR = "Ano ({year})"
LABEL_CUSTOM = "Período ({start} - {end})"

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

# Operator efficiency scoring
EFFICIENCY_FULL_VOLUME_CALLS = 10
EFFICIENCY_TALK_TIME_CEILING_SECONDS = 300
