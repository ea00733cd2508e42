import math

'''
class stroke: a scripted pointer drag replayed into a force_input
params:
    id: pointer id
    start, end: normalized positions, x in [0, aspect] and y in [0, 1]
    first_frame: frame of the press
    frames: number of frames the pointer moves before it is released
'''


class stroke:
    def __init__(self, id, start, end, first_frame=0, frames=30):
        self.id = id
        self.start = start
        self.end = end
        self.first_frame = first_frame
        self.frames = max(1, frames)

    def position(self, frame):
        t = min(1.0, (frame - self.first_frame) / self.frames)
        return (self.start[0] + t * (self.end[0] - self.start[0]),
                self.start[1] + t * (self.end[1] - self.start[1]))

    def feed(self, inputs, frame):
        last_frame = self.first_frame + self.frames
        if frame == self.first_frame:
            inputs.on_force_start(self.id, self.start)
        elif self.first_frame < frame <= last_frame:
            inputs.on_force_move(self.id, self.position(frame))
        if frame == last_frame:
            inputs.on_force_end(self.id)


def swirl(aspect, frames=120):
    strokes = []
    for k in range(4):
        a0 = k * math.pi / 2
        a1 = a0 + math.pi / 2
        cx, cy, r = 0.5 * aspect, 0.5, 0.3
        strokes.append(
            stroke(k, (cx + r * math.cos(a0), cy + r * math.sin(a0)),
                   (cx + r * math.cos(a1), cy + r * math.sin(a1)),
                   first_frame=k * frames // 8,
                   frames=frames // 4))
    return strokes


def collide(aspect, frames=120):
    return [
        stroke(0, (0.1 * aspect, 0.5), (0.45 * aspect, 0.5), 0, frames // 3),
        stroke(1, (0.9 * aspect, 0.5), (0.55 * aspect, 0.5), 0, frames // 3),
    ]


SCENES = {'Swirl': swirl, 'Collide': collide}


def load_scene(name, aspect, frames=120):
    if name not in SCENES:
        raise ValueError("Scene {} not supported".format(name))
    return SCENES[name](aspect, frames)
