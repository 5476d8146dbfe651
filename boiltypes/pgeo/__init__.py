"""PostgreSQL geometric types: points, lines, segments, boxes, paths, polygons and circles."""