# ruler_compass/construction/rendering.py

"""
绘制接口。

引擎本身不关心画布：它只通过 `Renderer` 的四个操作输出图形。真实的画布
（浏览器 canvas、Qt 视图等）由外部实现；`DrawCommandRecorder` 把每一次
调用记录成命令列表，供 HTTP 接口返回给前端，也方便测试检查。
"""
from abc import ABC, abstractmethod
from collections import namedtuple

DrawCommand = namedtuple('DrawCommand', ['op', 'args'])


class Renderer(ABC):

    @abstractmethod
    def clear(self):
        """在每次完整重绘之前清空画面。"""

    @abstractmethod
    def draw_point(self, x, y, radius):
        pass

    @abstractmethod
    def draw_segment(self, x0, y0, x1, y1):
        pass

    @abstractmethod
    def draw_circle(self, x, y, r):
        pass


class DrawCommandRecorder(Renderer):
    """
    记录绘制命令的 Renderer。

    `clear()` 会清空已记录的命令，因此一次完整重绘之后 `commands`
    恰好是当前这一帧的内容。
    """

    def __init__(self):
        self.commands = []

    def clear(self):
        self.commands = [DrawCommand('clear', ())]

    def draw_point(self, x, y, radius):
        self.commands.append(DrawCommand('point', (x, y, radius)))

    def draw_segment(self, x0, y0, x1, y1):
        self.commands.append(DrawCommand('segment', (x0, y0, x1, y1)))

    def draw_circle(self, x, y, r):
        self.commands.append(DrawCommand('circle', (x, y, r)))
