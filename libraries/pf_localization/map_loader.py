import numpy as np
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Landmark:
    id: int
    x: float
    y: float


@dataclass(frozen=True)
class LandmarkMap:
    landmarks: tuple
    # (M, 2) coordinate table, row i belongs to landmarks[i]
    coords: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def from_landmarks(cls, landmarks):
        landmarks = tuple(landmarks)
        coords = np.array([[lm.x, lm.y] for lm in landmarks], dtype=np.float64).reshape(-1, 2)
        coords.setflags(write=False)  ## shared read-only by every particle
        return cls(landmarks=landmarks, coords=coords)

    def __len__(self):
        return len(self.landmarks)

    def __iter__(self):
        return iter(self.landmarks)

    def __getitem__(self, index):
        return self.landmarks[index]


## load landmark map from text file, one "x y id" record per line
def load_map(map_path):
    landmarks = []
    with open(map_path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            parts = line.split()
            if not parts:
                continue
            if len(parts) != 3:
                raise ValueError(f"{map_path}:{line_no}: expected 'x y id', got {line.strip()!r}")

            x, y = float(parts[0]), float(parts[1])
            landmarks.append(Landmark(id=int(parts[2]), x=x, y=y))

    ids = [lm.id for lm in landmarks]
    if len(set(ids)) != len(ids):
        raise ValueError(f"duplicate landmark ids in {map_path}")

    return LandmarkMap.from_landmarks(landmarks)
