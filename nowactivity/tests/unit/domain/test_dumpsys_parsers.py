from __future__ import annotations

from nowactivity.domain import dumpsys

WINDOW_DUMP = """\
WINDOW MANAGER WINDOWS (dumpsys window windows)
  Window #3 Window{8a1f2c u0 com.android.systemui/com.android.systemui.ImageWallpaper}:
    mDisplayId=0 rootTaskId=1
  mCurrentFocus=Window{4f1c2a0 u0 com.example.app/com.example.app.ui.MainActivity}
  mFocusedApp=ActivityRecord{77aa u0 com.example.app/.ui.MainActivity t42}
"""

ACTIVITIES_DUMP = """\
ACTIVITY MANAGER ACTIVITIES (dumpsys activity activities)
Display #0 (activities from top to bottom):
    mResumedActivity: ActivityRecord{3c4d5e u0 com.example.app/.DetailActivity t12}
  ResumedActivity: ActivityRecord{3c4d5e u0 com.example.app/.DetailActivity t12}
"""

TOP_DUMP = """\
TASK 12:com.example.app id=12 userId=0
  ACTIVITY com.example.app/.CheckoutActivity 5e6f7a pid=1234
    Local Activity 1a2b3c State:
"""

STACK_LIST = """\
Stack id=0 bounds=[0,0][1080,1920] displayId=0 userId=0
  taskId=2: com.android.launcher3/.Launcher bounds=[0,0][1080,1920] userId=0 visible=false
  taskId=14: com.example.app/.Foo bounds=[0,0][1080,1920] userId=0 visible=true
"""

LOGCAT_TAIL = """\
--------- beginning of main
05-01 12:00:01.000  1000  1200 I ActivityTaskManager: START u0 {act=android.intent.action.MAIN cmp=com.example.app/.SplashActivity} from uid 2000
05-01 12:00:02.000  1000  1200 I ActivityTaskManager: Displayed com.example.app/.MainActivity: +512ms
05-01 12:00:03.000  1000  1200 I ActivityManager: Killing 4321:com.old.app/u0a12 (adj 900): empty
"""

RECENTS_DUMP = """\
ACTIVITY MANAGER RECENT TASKS (dumpsys activity recents)
  Recent tasks:
  * Recent #0: Task{d1e2 #42 type=standard A=10123:com.example.app U=0 visible=true}
    userId=0 effectiveUid=u0a123 mCallingUid=u0a123
    intent={act=android.intent.action.MAIN flg=0x10200000 cmp=com.example.app/.HomeActivity}
  * Recent #1: Task{a9b8 #41 type=home A=10045:com.android.launcher3 U=0}
    intent={cmp=com.android.launcher3/.Launcher}
"""


def test_window_focus() -> None:
    assert dumpsys.parse_window_focus(WINDOW_DUMP) == "com.example.app/com.example.app.ui.MainActivity"


def test_window_focus_accepts_focused_window_marker() -> None:
    text = "  mFocusedWindow=Window{1 u0 com.app/.Main}\n"
    assert dumpsys.parse_window_focus(text) == "com.app/.Main"


def test_window_focus_ignores_focus_without_component() -> None:
    assert dumpsys.parse_window_focus("  mCurrentFocus=null\n") is None
    assert dumpsys.parse_window_focus("") is None


def test_resumed_activity() -> None:
    assert dumpsys.parse_resumed_activity(ACTIVITIES_DUMP) == "com.example.app/.DetailActivity"


def test_top_activity_prefers_activity_record() -> None:
    assert dumpsys.parse_top_activity(TOP_DUMP) == "com.example.app/.CheckoutActivity"


def test_top_activity_accepts_loose_activity_mention() -> None:
    text = "  mActivityComponent=com.app/.Loose\n"
    assert dumpsys.parse_top_activity(text) == "com.app/.Loose"


def test_stack_list_uses_visible_task() -> None:
    assert dumpsys.parse_stack_list(STACK_LIST) == "com.example.app/.Foo"


def test_current_activity() -> None:
    assert dumpsys.parse_current_activity("Activity: com.app/.Current\n") == "com.app/.Current"
    assert dumpsys.parse_current_activity("Unknown command: get-current\n") is None


def test_logcat_scans_newest_line_first() -> None:
    assert dumpsys.parse_logcat(LOGCAT_TAIL) == "com.example.app/.MainActivity"


def test_logcat_reads_launch_intent_component() -> None:
    text = "I ActivityManager: START u0 {flg=0x10000000 cmp=com.app/.Launched} from uid 1\n"
    assert dumpsys.parse_logcat(text) == "com.app/.Launched"


def test_logcat_reads_resuming_component() -> None:
    text = "I ActivityTaskManager: Resuming ActivityRecord{1 u0 com.app/.Resumed t3}\n"
    assert dumpsys.parse_logcat(text) == "com.app/.Resumed"


def test_logcat_ignores_other_tags() -> None:
    text = "I WindowManager: Displayed com.app/.Main: +10ms\n"
    assert dumpsys.parse_logcat(text) is None


def test_recents_uses_first_entry_block() -> None:
    assert dumpsys.parse_recents(RECENTS_DUMP) == "com.example.app/.HomeActivity"


def test_recents_without_entries() -> None:
    assert dumpsys.parse_recents("Recent tasks:\n") is None
