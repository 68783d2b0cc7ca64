from cubdungeon.menu import (
    CONTINUE,
    CONTINUE_HOVER,
    EXIT_HOVER,
    MUTED,
    SCROLL_END,
    SCROLL_FIRST,
    SETTINGS_HOVER,
    START,
    START_HOVER,
    UNMUTED,
    Menu,
    MenuAction,
)


def opened(sound=True):
    menu = Menu()
    menu.open(1_000_000, sound)
    return menu


def test_open_shows_start_buttons():
    menu = opened()
    assert menu.in_menu is True
    assert menu.enabled[START] and menu.enabled[UNMUTED]
    assert not menu.enabled[MUTED]
    assert menu.scroll_mode == "N"
    assert menu.scroll_frame == SCROLL_FIRST


def test_open_muted_shows_muted_icon():
    menu = opened(sound=False)
    assert menu.enabled[MUTED] and not menu.enabled[UNMUTED]


def test_start_click_leaves_menu():
    menu = opened()
    assert menu.click(200, 300) is MenuAction.START_GAME
    assert menu.in_menu is False
    assert menu.started_game is True
    assert not any(menu.enabled[:12])


def test_reopen_after_start_shows_continue():
    menu = opened()
    menu.click(200, 300)
    menu.open(2_000_000, True)
    assert menu.enabled[CONTINUE]


def test_close_with_scroll_open_rolls_it_up():
    menu = opened()
    menu.click(200, 400)
    assert menu.scroll_mode == "O"
    assert menu.close() is False
    assert menu.scroll_mode == "C"
    assert menu.in_menu is True


def test_exit_click_quits():
    assert opened().click(150, 480) is MenuAction.QUIT


def test_sound_toggle_flips_icons():
    menu = opened()
    assert menu.click(1850, 1010) is MenuAction.TOGGLE_SOUND
    assert menu.sound is False
    assert menu.enabled[MUTED] and not menu.enabled[UNMUTED]
    menu.click(1850, 1010)
    assert menu.sound is True
    assert menu.enabled[UNMUTED] and not menu.enabled[MUTED]


def test_settings_clicks_ignored_while_scroll_closed():
    menu = opened()
    assert menu.click(1400, 360) is MenuAction.NONE
    assert menu.settings.rs == 1.0


def test_crosshair_click_with_scroll_open():
    menu = opened()
    menu.click(200, 400)
    assert menu.click(1430, 680) is MenuAction.ADJUST
    assert menu.settings.cross_type == "C"
    assert menu.enabled[38]


def test_hover_highlights_buttons():
    menu = opened()
    menu.hover(200, 300)
    assert menu.enabled[START_HOVER]
    menu.hover(200, 400)
    assert menu.enabled[SETTINGS_HOVER] and not menu.enabled[START_HOVER]
    menu.hover(150, 480)
    assert menu.enabled[EXIT_HOVER] and not menu.enabled[SETTINGS_HOVER]


def test_hover_after_start_uses_continue():
    menu = opened()
    menu.click(200, 300)
    menu.open(2_000_000, True)
    menu.hover(200, 300)
    assert menu.enabled[CONTINUE_HOVER] and not menu.enabled[START_HOVER]


def test_hover_ignored_outside_menu():
    menu = opened()
    menu.click(200, 300)
    assert menu.in_menu is False
    before = list(menu.enabled)
    menu.hover(200, 300)
    assert list(menu.enabled) == before
    assert not menu.enabled[CONTINUE_HOVER]
    assert not menu.enabled[START_HOVER]


def test_background_cycles_one_frame_at_a_time():
    menu = opened()
    now = 1_000_000
    for _ in range(12):
        now += 151
        menu.animate_background(now)
        assert sum(menu.enabled[:6]) == 1
    assert 0 <= menu.back_frame < 6


def test_background_waits_for_frame_time():
    menu = opened()
    frame = menu.back_frame
    menu.animate_background(1_000_000 + 100)
    assert menu.back_frame == frame


def test_scroll_opens_and_closes():
    menu = opened()
    menu.click(200, 400)
    now = 1_000_000
    while menu.scroll_frame < SCROLL_END:
        now += 16
        menu.animate_scroll(now)
    assert menu.enabled[SCROLL_END - 1]
    now += 16
    menu.animate_scroll(now)
    assert all(menu.enabled[33:37])
    assert menu.enabled[46] and menu.enabled[51] and menu.enabled[59]
    menu.click(200, 400)
    for _ in range(100):
        if menu.scroll_mode == "N":
            break
        now += 16
        menu.animate_scroll(now)
    assert menu.scroll_mode == "N"
    assert not any(menu.enabled[SCROLL_FIRST:65])


def test_animate_requests_music_when_due():
    menu = opened()
    assert menu.animate(1_000_000 + 1000) is False
    assert menu.animate(1_000_000 + 95_000) is True


def test_animate_no_music_when_muted():
    menu = opened(sound=False)
    assert menu.animate(1_000_000 + 95_000) is False