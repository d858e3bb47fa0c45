"""
Built-in demonstration timetable.

Shown when the user has not imported anything yet. Unlike parsed data it
uses odd/even week patterns (计算机网络 on odd weeks, 算法设计 on even
weeks).
"""
from __future__ import annotations

from typing import List

from .models import OccurrencePattern, ScheduleEntry

EVERY = OccurrencePattern.EVERY_WEEK


def sample_entries() -> List[ScheduleEntry]:
    return [
        # 周一
        ScheduleEntry("高等数学", 1, 1, 2, 1, 16, room="A101", instructor="张教授",
                      occurrence=EVERY, color=0xFFE57373, credit=4.0),
        ScheduleEntry("大学英语", 1, 3, 4, 1, 16, room="B203", instructor="李老师",
                      occurrence=EVERY, color=0xFF64B5F6, credit=3.0),
        ScheduleEntry("体育", 1, 9, 10, 1, 16, room="操场", instructor="王教练",
                      occurrence=EVERY, color=0xFF81C784, credit=1.0),
        # 周二
        ScheduleEntry("程序设计基础", 2, 1, 3, 1, 16, room="C301", instructor="刘教授",
                      occurrence=EVERY, color=0xFFFFB74D, credit=4.0),
        ScheduleEntry("数据结构", 2, 5, 6, 1, 16, room="C302", instructor="陈老师",
                      occurrence=EVERY, color=0xFFBA68C8, credit=3.5),
        # 周三
        ScheduleEntry("线性代数", 3, 1, 2, 1, 16, room="A102", instructor="赵教授",
                      occurrence=EVERY, color=0xFF4DB6AC, credit=3.0),
        ScheduleEntry("计算机网络", 3, 3, 4, 1, 10, room="D201", instructor="孙老师",
                      occurrence=OccurrencePattern.ODD_WEEKS, color=0xFFF06292, credit=3.0),
        # 周四
        ScheduleEntry("操作系统", 4, 1, 2, 1, 16, room="C303", instructor="周教授",
                      occurrence=EVERY, color=0xFF9575CD, credit=4.0),
        ScheduleEntry("数据库原理", 4, 5, 7, 1, 16, room="C304", instructor="吴老师",
                      occurrence=EVERY, color=0xFF4FC3F7, credit=3.5),
        # 周五
        ScheduleEntry("软件工程", 5, 1, 2, 1, 16, room="D301", instructor="郑教授",
                      occurrence=EVERY, color=0xFFAED581, credit=3.0),
        ScheduleEntry("算法设计", 5, 3, 4, 2, 16, room="C305", instructor="钱老师",
                      occurrence=OccurrencePattern.EVEN_WEEKS, color=0xFFFFD54F, credit=3.0),
    ]
