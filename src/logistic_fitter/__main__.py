from logistic_fitter import main

main()
