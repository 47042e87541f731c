# ruler_compass/geometry/kernels.py

"""
================================================================================
 求交计算内核 (ruler_compass/geometry/kernels.py)
================================================================================

模块功能:
本模块是作图引擎的“计算引擎”。它包含三个纯粹的求交函数：直线与直线、
直线与圆、圆与圆。每当用户添加一个新的几何对象，构造图 (construction graph)
都会调用这里的函数，把新对象与所有已有对象逐一求交。

核心技术 - Numba JIT (即时编译):
- 一次交互可能触发与几百个已有对象的求交运算，而且每次鼠标拖动都要重画。
  我们使用Numba的`@njit`装饰器，把这些函数编译成接近C语言速度的机器码。
- 本模块中的函数只接受并返回NumPy数组与标量，不接触任何Python对象。
  把交点“喂给”直线的自动延伸规则 (Line.update) 属于对象层的副作用，
  由 primitives.py 负责，内核本身没有任何副作用。

数据约定:
- 直线: `[x0, y0, x1, y1]`，即定义直线的两个端点。
- 圆:   `[cx, cy, r]`，注意这里存放的是半径本身，而不是半径的平方。

[函数返回格式说明]
所有求交函数都返回一个元组 `(results, count)`：
- `results`: 固定的 2x2 NumPy数组（未使用的行填充为NaN），存放最多两个交点。
- `count`:   整数 (0, 1, 2)，表示实际找到的交点数量。
交点的排列顺序是有意义的：它决定了拾取 (hit-testing) 时“先到者胜”的结果，
因此调用方必须按 `results[:count]` 的顺序使用它们。
"""
import numpy as np
from numba import njit

# 浮点数比较阈值。这三个值共同区分了“数值上平行/相切”与“真正相交”两种情况，
# 下游的拾取顺序和直线延伸规则都依赖于它们，不能修改。

# 两条直线方向向量的行列式小于此值时，视为平行（或重合）。
PARALLEL_EPSILON = 1e-6
# 直线与圆的判别式 root 落在 [0, 此值) 内时，视为相切。
TANGENT_ROOT_EPSILON = 1e-12
# 两圆交点到连心线的偏移 yd 小于此值时，视为相切。
TANGENT_OFFSET_EPSILON = 1e-3


@njit(cache=True)
def intersect_line_line(line0, line1):
    """
    计算两条（无限长）直线的交点。
    返回一个元组 (results, count)。

    数学原理:
    设两条直线的方向向量分别为 (dx0, dy0) 和 (dx1, dy1)，其行列式
    det = dx0*dy1 - dy0*dx1 为零时两直线平行。否则使用标准的叉积公式:
        x = (cross0*dx1 - cross1*dx0) / det
        y = (cross0*dy1 - cross1*dy0) / det
    其中 cross_i 是第 i 条直线两个端点的叉积。

    注意: 共线的两条线段同样返回 0 个交点，这是有意的简化。
    """
    results = np.full((2, 2), np.nan, dtype=np.float64)
    ax0, ay0, ax1, ay1 = line0[0], line0[1], line0[2], line0[3]
    bx0, by0, bx1, by1 = line1[0], line1[1], line1[2], line1[3]

    dx0 = ax0 - ax1
    dy0 = ay0 - ay1
    dx1 = bx0 - bx1
    dy1 = by0 - by1
    det = dx0 * dy1 - dy0 * dx1

    if abs(det) < PARALLEL_EPSILON:
        return results, 0

    cross0 = ax0 * ay1 - ay0 * ax1
    cross1 = bx0 * by1 - by0 * bx1
    results[0, 0] = (cross0 * dx1 - cross1 * dx0) / det
    results[0, 1] = (cross0 * dy1 - cross1 * dy0) / det
    return results, 1


@njit(cache=True)
def intersect_line_circle(line, circle):
    """
    计算一条直线和一个圆的交点。
    返回一个元组 (results, count)，两个交点时顺序为 [p_minus, p_plus]。

    数学原理:
    以圆心为原点平移直线的两个端点，记 d = p1 - p0，
    det 为两个端点的叉积（正比于圆心到直线的有向距离），则判别式
        root = r^2 * |d|^2 - det^2
    - root < 0:            直线与圆相离，没有交点。
    - 0 <= root < 1e-12:   相切，返回垂足。
    - 否则:                 垂足沿直线方向各偏移 (d / |d|^2) * sqrt(root)。
    """
    results = np.full((2, 2), np.nan, dtype=np.float64)
    cx, cy, r = circle[0], circle[1], circle[2]

    x0 = line[0] - cx
    y0 = line[1] - cy
    x1 = line[2] - cx
    y1 = line[3] - cy
    dx = x1 - x0
    dy = y1 - y0
    d2 = dx * dx + dy * dy
    det = x0 * y1 - x1 * y0
    root = r * r * d2 - det * det

    if root < 0:
        return results, 0

    # 圆心到直线的垂足
    x = cx + det * dy / d2
    y = cy - det * dx / d2

    if root < TANGENT_ROOT_EPSILON:
        results[0, 0] = x
        results[0, 1] = y
        return results, 1

    sqrt_root = np.sqrt(root)
    dxpm = dx / d2 * sqrt_root
    dypm = dy / d2 * sqrt_root

    results[0, 0] = x - dxpm
    results[0, 1] = y - dypm
    results[1, 0] = x + dxpm
    results[1, 1] = y + dypm
    return results, 2


@njit(cache=True)
def intersect_circle_circle(circle_this, circle_other):
    """
    计算两个圆的交点（通过根轴求解）。
    返回一个元组 (results, count)，两个交点时顺序为 [p_plus, p_minus]，
    与直线-圆的顺序相反。

    数学原理:
    d 为圆心距，xd = (d^2 - r_other^2 + r_this^2) / (2d) 是从 circle_this
    的圆心沿连心线到根轴的有向距离，yd^2 = r_this^2 - xd^2。
    - yd^2 < 0:   两圆相离或内含，没有交点。
    - yd < 1e-3:  相切，返回根轴与连心线的交点。
    - 否则:        沿垂直于连心线的方向各偏移 yd。
    同心圆 (d == 0) 没有根轴，按无交点处理。
    """
    results = np.full((2, 2), np.nan, dtype=np.float64)
    x_this, y_this, r_this = circle_this[0], circle_this[1], circle_this[2]
    x_other, y_other, r_other = circle_other[0], circle_other[1], circle_other[2]

    dx = x_other - x_this
    dy = y_other - y_this
    d_sq = dx * dx + dy * dy
    if d_sq == 0.0:
        return results, 0

    d = np.sqrt(d_sq)
    xd = (d_sq - r_other * r_other + r_this * r_this) / (2 * d)
    yd2 = r_this * r_this - xd * xd
    if yd2 < 0:
        return results, 0

    yd = np.sqrt(yd2)
    x = x_this + xd * dx / d
    y = y_this + xd * dy / d

    if yd < TANGENT_OFFSET_EPSILON:
        results[0, 0] = x
        results[0, 1] = y
        return results, 1

    dxpm = yd * dy / d
    dypm = -yd * dx / d

    results[0, 0] = x + dxpm
    results[0, 1] = y + dypm
    results[1, 0] = x - dxpm
    results[1, 1] = y - dypm
    return results, 2
