from sparse_matrix_calc.scripts.matrix_calculator import main


if __name__ == '__main__':
    raise SystemExit(main())
