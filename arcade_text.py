"""
Localized UI strings for the arcade.

Every game looks its strings up through a Translations instance bound to
its own namespace ("goldminer", "tetris", ...). Lookups fall back to English
and, failing that, to a visible placeholder so a missing key never breaks a
frame.
"""

from __future__ import annotations

import os
from enum import Enum


class Language(Enum):
    ENGLISH = "en"
    CHINESE = "zh"


def _t(en: str, zh: str) -> dict[Language, str]:
    return {Language.ENGLISH: en, Language.CHINESE: zh}


# ── Common / menu ───────────────────────────────────────────────────────
TEXTS: dict[str, dict[Language, str]] = {
    "menu_title": _t("Terminal Game Collection", "终端游戏集合"),
    "available_games": _t("Available Games:", "可用游戏："),
    "controls": _t(
        "Controls:\n"
        "- Use UP/DOWN arrows or 1-5 to select\n"
        "- Press ENTER to start game\n"
        "- T: Change language\n"
        "- C: Change compile style\n"
        "- Q: Quit (inside a game: back to menu)",
        "控制：\n"
        "- 使用上下方向键或1-5选择\n"
        "- 按回车键开始游戏\n"
        "- T：切换语言\n"
        "- C：切换编译风格\n"
        "- Q：退出（游戏中：返回菜单）",
    ),
    "compiling": _t(
        "- Press P or Esc to pause a game and pretend to compile code",
        "- 游戏中按P或Esc可暂停游戏并假装编译代码（摸鱼）",
    ),
    "compile_style": _t("Compile style:", "编译风格："),
    "select_language": _t("Select Language:", "选择语言："),
    "select_compile": _t("Select Compile Style:", "选择编译风格："),
    "cancel": _t("ESC: Cancel", "ESC：取消"),
    "goldminer_title": _t("Gold Miner", "黄金矿工"),
    "tetris_title": _t("Tetris", "俄罗斯方块"),
    "snake_title": _t("Snake", "贪吃蛇"),
    "twenty_forty_eight_title": _t("2048", "2048"),
    "minesweeper_title": _t("Minesweeper", "扫雷"),
    "too_small": _t("Window too small!", "窗口太小！"),
    "please_resize": _t("Please resize", "请调整窗口大小"),
}

# ── Gold miner ──────────────────────────────────────────────────────────
TEXTS.update({
    "goldminer.title": _t("Gold Miner", "黄金矿工"),
    "goldminer.welcome_to": _t("Welcome to", "欢迎来到"),
    "goldminer.level": _t("Level:", "关卡："),
    "goldminer.score": _t("Score:", "分数："),
    "goldminer.how_to_play": _t("How to Play:", "游戏说明："),
    "goldminer.hook_swing": _t("1. The hook swings automatically", "1. 钩子自动摆动"),
    "goldminer.press_space": _t("2. Press SPACE to release the hook", "2. 按空格键释放钩子"),
    "goldminer.catch_gold": _t("3. Catch gold (◆/♦) to earn points:", "3. 抓取金块（◆/♦）获得分数："),
    "goldminer.big_gold_points": _t("   - Big gold (◆) : 200 points", "   - 大金块（◆）：200分"),
    "goldminer.small_gold_points": _t("   - Small gold (♦) : 100 points", "   - 小金块（♦）：100分"),
    "goldminer.avoid_stones": _t("4. Avoid stones (■/□) (-50 points)", "4. 避开石头（■/□）（-50分）"),
    "goldminer.collect_all_gold": _t(
        "5. Collect all gold to advance to next level", "5. 收集所有金块进入下一关"
    ),
    "goldminer.higher_levels": _t("6. Higher Levels:", "6. 更高关卡："),
    "goldminer.faster_hook": _t("- Hook swings faster", "- 钩子摆动更快"),
    "goldminer.heavier_items": _t("- Items become heavier", "- 物品变得更重"),
    "goldminer.more_obstacles": _t("- More obstacles appear", "- 出现更多障碍"),
    "goldminer.controls_title": _t("Game Controls:", "游戏控制："),
    "goldminer.space_control": _t("SPACE: Release hook", "空格键：释放钩子"),
    "goldminer.pause_control": _t("P/ESC: Pause", "P/ESC：暂停"),
    "goldminer.quit_control": _t("Q: Return to main menu", "Q：返回主菜单"),
    "goldminer.press_enter": _t("Press ENTER to start!", "按回车键开始！"),
})

# ── Tetris ──────────────────────────────────────────────────────────────
TEXTS.update({
    "tetris.title": _t("Tetris", "俄罗斯方块"),
    "tetris.welcome_to": _t("Welcome to", "欢迎来到"),
    "tetris.score": _t("Score:", "分数："),
    "tetris.lines": _t("Lines:", "行数："),
    "tetris.game_over": _t("Game Over!", "游戏结束！"),
    "tetris.press_r_restart": _t("Press 'R' to restart", "按'R'键重新开始"),
    "tetris.how_to_play": _t("How to Play:", "游戏说明："),
    "tetris.move_horizontal": _t("LEFT/RIGHT or A/D: Move", "左右方向键或A/D：移动"),
    "tetris.speed_up": _t("DOWN or S: Speed up", "下方向键或S：加速下落"),
    "tetris.rotate": _t("UP or W: Rotate", "上方向键或W：旋转"),
    "tetris.hard_drop": _t("SPACE: Hard drop", "空格键：直接落下"),
    "tetris.clear_lines": _t("Clear full lines to score:", "消除整行得分："),
    "tetris.one_line": _t("1 line cleared: 100 points", "消除1行：100分"),
    "tetris.two_lines": _t("2 lines cleared: 300 points", "消除2行：300分"),
    "tetris.three_lines": _t("3 lines cleared: 500 points", "消除3行：500分"),
    "tetris.four_lines": _t("4 lines cleared: 800 points", "消除4行：800分"),
    "tetris.game_ends": _t(
        "The game ends when blocks reach the top", "方块堆到顶部时游戏结束"
    ),
    "tetris.quit_control": _t("Q: Return to main menu", "Q：返回主菜单"),
    "tetris.press_enter": _t("Press ENTER to start!", "按回车键开始！"),
    "tetris.pause_game": _t("P/ESC: Pause / resume", "P/ESC：暂停/继续"),
    "tetris.restart": _t("R: Restart after game over", "R：游戏结束后重新开始"),
})

# ── Snake ───────────────────────────────────────────────────────────────
TEXTS.update({
    "snake.title": _t("Snake", "贪吃蛇"),
    "snake.welcome_to": _t("Welcome to", "欢迎来到"),
    "snake.score": _t("Score:", "分数："),
    "snake.game_over": _t("Game Over!", "游戏结束！"),
    "snake.press_r_restart": _t("Press 'R' to restart", "按'R'键重新开始"),
    "snake.how_to_play": _t("How to Play:", "游戏说明："),
    "snake.move_snake": _t("Arrow keys or WASD: Steer the snake", "方向键或WASD：控制蛇的方向"),
    "snake.eat_food_title": _t("Eat food to grow and score:", "吃食物变长并得分："),
    "snake.apple_desc": _t("- Apple (big, 2x2): 50 points", "- 苹果（大，2x2）：50分"),
    "snake.candy_desc": _t("- Candy (small): 150 points", "- 糖果（小）：150分"),
    "snake.avoid_walls": _t("Avoid the walls and your own tail!", "不要撞墙或咬到自己！"),
    "snake.press_enter": _t("Press ENTER to start", "按回车键开始"),
    "snake.pause_game": _t("Press P/ESC to pause", "按P/ESC暂停"),
})

# ── 2048 ────────────────────────────────────────────────────────────────
TEXTS.update({
    "twenty_forty_eight.title": _t("2048", "2048"),
    "twenty_forty_eight.welcome_title": _t("Welcome to 2048!", "欢迎来到2048！"),
    "twenty_forty_eight.how_to_play": _t("How to Play:", "游戏说明："),
    "twenty_forty_eight.move_controls": _t(
        "Arrow keys or WASD: Slide all tiles", "方向键或WASD：滑动所有方块"
    ),
    "twenty_forty_eight.merge_tip": _t(
        "Equal tiles merge into one when they touch", "相同的数字相碰时合并"
    ),
    "twenty_forty_eight.pause_control": _t("P/ESC: Pause / resume", "P/ESC：暂停/继续"),
    "twenty_forty_eight.press_enter": _t("Press Enter to start", "按回车键开始"),
    "twenty_forty_eight.score": _t("Score: ", "分数："),
    "twenty_forty_eight.game_over": _t(
        "Game Over! Press 'r' to restart", "游戏结束！按'r'键重新开始"
    ),
})

# ── Minesweeper ─────────────────────────────────────────────────────────
TEXTS.update({
    "minesweeper.title": _t("Minesweeper", "扫雷"),
    "minesweeper.welcome_to": _t("Welcome to", "欢迎来到"),
    "minesweeper.score": _t("Revealed:", "已翻开："),
    "minesweeper.mines_left": _t("Mines:", "地雷："),
    "minesweeper.game_win": _t("Congratulations! You Win!", "恭喜你！胜利了！"),
    "minesweeper.game_over": _t("Game Over!", "游戏结束！"),
    "minesweeper.press_r_restart": _t("Press 'r' to restart", "按'r'键重新开始"),
    "minesweeper.how_to_play": _t("How to Play:", "游戏说明："),
    "minesweeper.press_enter": _t("Press Enter to start", "按回车键开始"),
    "minesweeper.controls": _t(
        "- Use arrow keys or WASD to move\n"
        "- Space to reveal a cell\n"
        "- F to flag/unflag a mine\n"
        "- P/ESC to pause\n"
        "- Yellow highlight shows current cell",
        "- 使用方向键或WASD移动\n"
        "- 空格键翻开格子\n"
        "- F键标记/取消标记地雷\n"
        "- P/ESC暂停游戏\n"
        "- 黄色高亮显示当前选中的格子",
    ),
    "minesweeper.goal": _t(
        "Win by either:\n- Revealing all safe cells\n- Correctly flagging all mines",
        "胜利条件：\n- 翻开所有安全格子\n- 或正确标记所有地雷",
    ),
})


def detect_system_language() -> Language:
    """Chinese when LANG asks for it, English otherwise."""
    lang = os.environ.get("LANG", "").lower()
    if lang.startswith("zh_"):
        return Language.CHINESE
    return Language.ENGLISH


class Translations:
    """Looks up UI strings for one namespace in the selected language."""

    def __init__(self, namespace: str = "", language: Language | None = None) -> None:
        self.namespace = namespace
        self.language: Language = (
            language if language is not None else detect_system_language()
        )

    def set_language(self, language: Language) -> None:
        self.language = language

    def get_text(self, key: str) -> str:
        full_key = f"{self.namespace}.{key}" if self.namespace else key
        entry = TEXTS.get(full_key)
        if entry is None:
            return f"Missing translation: {full_key}"
        text = entry.get(self.language)
        if text is None:
            text = entry.get(Language.ENGLISH)
        if text is None:
            return f"Missing translation: {full_key}"
        return text

    def lines(self, key: str) -> list[str]:
        """Multi-line entries split into display rows."""
        return self.get_text(key).split("\n")
