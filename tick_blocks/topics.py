"""Signal names exchanged over the bus.

Intent topics are published by menus and input collaborators. Session and
entity topics are published by the core.
"""
from __future__ import annotations

# Intents (consumed by the core)
MENU_PLAY = "menu:play"
MENU_RESUME = "menu:resume"
MENU_CONTINUE = "menu:continue"
MENU_RESTART = "menu:restart"
MENU_MAIN_MENU = "menu:main-menu"
MENU_ANIMATING = "menu:animating"  # animating: bool
INPUT_PAUSE_KEY = "input:pause-key"
INSTRUCTIONS_DONE = "instructions:done"
SCORE_INCREASE = "score:increase"  # amount: int
SCORE_DECREASE = "score:decrease"  # amount: int
ENTITY_INTERCEPTED = "entity:intercepted"  # entity: Entity

# Session lifecycle (produced)
SESSION_STARTED = "session:started"
SESSION_PAUSED = "session:paused"
SESSION_RESUMED = "session:resumed"
SESSION_LEVEL_STARTED = "session:level-started"  # level
SESSION_LEVEL_STOPPED = "session:level-stopped"  # level
SESSION_NEXT_LEVEL = "session:next-level"  # level
SESSION_RESET = "session:reset"
SESSION_GAME_OVER = "session:game-over"  # score
SESSION_PHASE_CHANGED = "session:phase-changed"  # old, new
SESSION_SCORE_CHANGED = "session:score-changed"  # score
SESSION_LEVEL_CHANGED = "session:level-changed"  # level
SESSION_TIMER_PROGRESS = "session:timer-progress"  # progress
SESSION_SCORES = "session:scores"  # score_amount, danger_amount

# Entities (produced)
ENTITY_SPAWNED = "entity:spawned"  # variant, column, entity
ENTITY_REACHED_THRESHOLD = "entity:reached-threshold"  # variant, entity
ENTITY_SCORE_CLICKED = "entity:score-clicked"  # entity
ENTITY_DANGER_CLICKED = "entity:danger-clicked"  # entity
ENTITY_CLEARED = "entity:cleared"  # count

INTENTS = frozenset({
    MENU_PLAY,
    MENU_RESUME,
    MENU_CONTINUE,
    MENU_RESTART,
    MENU_MAIN_MENU,
    MENU_ANIMATING,
    INPUT_PAUSE_KEY,
    INSTRUCTIONS_DONE,
    SCORE_INCREASE,
    SCORE_DECREASE,
    ENTITY_INTERCEPTED,
})
